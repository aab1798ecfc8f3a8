import os

BACKEND_ROOT = os.path.abspath(os.path.dirname(__file__))

class Config:
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT', '3000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    # Backing store, resolved relative to the service's own location
    LEADERBOARD_FILE = os.environ.get('LEADERBOARD_FILE') or os.path.join(BACKEND_ROOT, 'leaderboard.json')
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    NAME_MAX_LENGTH = int(os.environ.get('NAME_MAX_LENGTH', '15'))
    SCORE_MAX = int(os.environ.get('SCORE_MAX', '999999'))
    # Callable returning the submission time; None uses the current UTC time
    LEADERBOARD_CLOCK = None
    # Browsers from any origin may call the API
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS') or '*'
