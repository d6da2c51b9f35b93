"""Development configuration."""
import os

from .base import Config

class DevelopmentConfig(Config):
    """Development configuration class."""
    
    DEBUG = True
    TESTING = False
    
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DEV_DATABASE_URL') or 'sqlite:///tutorhub_dev.db'
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'
    
    # Redis (optional in dev)
    REDIS_URL = os.getenv('REDIS_URL')
    
    LOG_LEVEL = 'DEBUG'
