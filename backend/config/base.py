"""Settings shared by every environment."""
import os
from datetime import timedelta

class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'jwt-secret-key-change-in-production'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=2)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=7)
    JWT_ALGORITHM = 'HS256'
    
    # CORS
    CORS_ORIGINS = ["http://localhost:*", "http://127.0.0.1:*"]
    
    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'
    RATELIMIT_DEFAULT = "200 per day, 50 per hour"
    
    # Sessions
    DEFAULT_SESSION_DURATION = 60  # minutes, used when a class has none
    BOOKMARK_MIN_LENGTH = 3
    BOOKMARK_MAX_LENGTH = 500
    KPI_TOLERANCE_MINUTES = 10
    
    # Payroll
    CURRENCY = 'RM'
    ALLOWANCE_CALCULATOR = None  # dotted path, e.g. "mypkg.payroll:calculate"
    
    # Pagination
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100
    
    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = 'logs/app.log'
