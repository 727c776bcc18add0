"""
Default settings for the inventory application.

Values are read from the environment when the application is created and
can be overridden by the mapping passed to `create_app`.
"""

import os


SCHEMA_MODES = ("reset", "create")


def load_config():
    """
    Build the settings mapping from environment variables

    Returns:
        dict: Settings ready for `app.config.update`
    """
    return {
        'PORT': int(os.environ.get('PORT', 3000)),
        'SECRET_KEY': os.environ.get('INVENTORY_SECRET_KEY') or os.urandom(12),
        # Connection URLs are built as <driver>://user:password@host:port/database
        'INVENTORY_DB_DRIVER': os.environ.get('INVENTORY_DB_DRIVER', 'mysql+pymysql'),
        # reset drops and recreates the products table on every connect
        'INVENTORY_SCHEMA_MODE': os.environ.get('INVENTORY_SCHEMA_MODE', 'reset'),
        'INVENTORY_CONNECT_TIMEOUT': int(os.environ.get('INVENTORY_CONNECT_TIMEOUT', 10)),
    }
