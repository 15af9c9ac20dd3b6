import os

class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///scores.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Accepted score range (inclusive)
    MIN_SCORE = int(os.environ.get('MIN_SCORE', '0'))
    MAX_SCORE = int(os.environ.get('MAX_SCORE', '300'))
    # Minimum gap between accepted submissions from the same fid (ms)
    SUBMIT_COOLDOWN_MS = int(os.environ.get('SUBMIT_COOLDOWN_MS', '10000'))
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', '10'))
    DEFAULT_USERNAME = os.environ.get('DEFAULT_USERNAME', 'anon')
    MAX_USERNAME_LENGTH = int(os.environ.get('MAX_USERNAME_LENGTH', '64'))
    # Comma separated list, or * for any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '127.0.0.1')
    PORT = int(os.environ.get('PORT', '3000'))
