import os


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-prod')
    
    # Score storage backend: memory, sql or redis
    PLAYER_STORE = os.getenv('PLAYER_STORE', 'memory')
    
    # Database (sql backend)
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///league.db')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Redis (redis backend)
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379')
    REDIS_KEY_PREFIX = os.getenv('REDIS_KEY_PREFIX', 'league')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    PLAYER_STORE = 'memory'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
