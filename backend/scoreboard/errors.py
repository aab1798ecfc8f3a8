"""Error taxonomy for the leaderboard service.

Client mistakes surface as 400s with a descriptive message; storage failures
surface as 500s with a generic message so file-system details stay internal.
"""


class LeaderboardError(Exception):
    status_code = 500
    public_message = 'An unexpected server error occurred.'

    def to_dict(self):
        return {'error': self.public_message}


class ValidationError(LeaderboardError):
    status_code = 400
    public_message = 'Invalid data: Name must be a non-empty string and score must be a number.'


class StorageReadError(LeaderboardError):
    public_message = 'Failed to retrieve leaderboard data.'


class StoragePersistError(LeaderboardError):
    public_message = 'Server error: Could not save the score.'
