"""
Centralized configuration for the local front controller.
All environment variable access should go through this Config class.
NO side effects at import time - load_dotenv() is called by the entry points.
"""
import os


class Config:
    DEFAULT_PORT = 8080
    DEFAULT_TLD = 'test'

    @staticmethod
    def get_port():
        return int(os.environ.get('PORT', Config.DEFAULT_PORT))

    @staticmethod
    def get_host():
        return os.environ.get('HOST', '127.0.0.1')

    @staticmethod
    def get_sites_path():
        return os.path.expanduser(os.environ.get('SITES_PATH', '~/Sites'))

    @staticmethod
    def get_tld():
        return os.environ.get('SITE_TLD', Config.DEFAULT_TLD).lstrip('.').lower()

    @staticmethod
    def get_log_level():
        return os.environ.get('LOG_LEVEL', 'INFO').upper()
