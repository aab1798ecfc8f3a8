import sys

from scoreboard import create_app
from scoreboard.errors import StoragePersistError

try:
    app = create_app()
except StoragePersistError as exc:
    print(f"FATAL: could not create leaderboard file, check permissions: {exc}", file=sys.stderr)
    sys.exit(1)

if __name__ == '__main__':
    host, port = app.config['HOST'], app.config['PORT']
    app.logger.info(f"[startup] API server running on http://localhost:{port}")
    app.run(host=host, port=port, threaded=True)
