"""
With these settings, tests run faster.
"""

from .base import *  # noqa: F403
from .base import LOGGING
from .base import TEMPLATES
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#secret-key
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="vQ7m2nZ0rXk4Lw9pT3sYc8HdJ1aF6gUeB5oN2iRtM0zKq7WxE4yPl3CjV9uSh6Db",
)
# https://docs.djangoproject.com/en/dev/ref/settings/#test-runner
TEST_RUNNER = "django.test.runner.DiscoverRunner"

# DATABASES
# ------------------------------------------------------------------------------
DATABASES = {"default": env.db("DATABASE_URL", default="sqlite://:memory:")}

# PASSWORDS
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#password-hashers
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# DEBUGGING FOR TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES[0]["OPTIONS"]["debug"] = True  # type: ignore[index]

# SOCKET.IO
# ------------------------------------------------------------------------------
SOCKETIO_LOGGER = False

# LOGGING
# ------------------------------------------------------------------------------
# Application records go through the root handler once, where caplog sees them.
LOGGING["loggers"]["uniconnect"]["handlers"] = []
LOGGING["loggers"]["uniconnect"]["propagate"] = True
