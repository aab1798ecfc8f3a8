from flask import Flask, jsonify
from flask_cors import CORS
import click
from config import Config
from scoreboard.errors import LeaderboardError, ValidationError
from scoreboard.services.leaderboard import LeaderboardStore

CORS_ALLOW_HEADERS = ['Origin', 'X-Requested-With', 'Content-Type', 'Accept']
CORS_METHODS = ['GET', 'POST', 'OPTIONS']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    CORS(
        flask_app,
        origins=flask_app.config.get('CORS_ORIGINS', '*'),
        allow_headers=CORS_ALLOW_HEADERS,
        methods=CORS_METHODS,
        send_wildcard=True,
    )

    store = LeaderboardStore(
        flask_app.config['LEADERBOARD_FILE'],
        size=int(flask_app.config.get('LEADERBOARD_SIZE', 10)),
        name_max_length=int(flask_app.config.get('NAME_MAX_LENGTH', 15)),
        score_max=int(flask_app.config.get('SCORE_MAX', 999999)),
        logger=flask_app.logger,
        clock=flask_app.config.get('LEADERBOARD_CLOCK'),
    )
    flask_app.logger.info(f"[startup] leaderboard file path: {store.path}")
    # Fatal on failure: there is no degraded mode without a writable store
    store.initialize()
    flask_app.extensions['leaderboard_store'] = store

    # Import and register blueprints here
    from scoreboard.routes import main
    flask_app.register_blueprint(main)

    from scoreboard.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api/leaderboard')

    @flask_app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        flask_app.logger.warning(f"[request] invalid data: {exc}")
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(LeaderboardError)
    def handle_leaderboard_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(500)
    def handle_unexpected_error(exc):
        original = getattr(exc, 'original_exception', None) or exc
        flask_app.logger.error(f"[request] unexpected server error: {original!r}")
        return jsonify({'error': LeaderboardError.public_message}), 500

    @click.command('leaderboard-reset')
    def leaderboard_reset_command():
        """Wipes the leaderboard back to an empty list."""
        store.reset()
        click.echo('Leaderboard has been reset!')

    flask_app.cli.add_command(leaderboard_reset_command)

    return flask_app
