"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Routes
HOME_PATH = "/"
REPOS_PATH = "/repos"

# OAuth state
STATE_COOKIE_NAME = "github_auth_state"
OAUTH_STATE_TTL_SECONDS = 600  # 10 minutes
LOG_STATE_PREFIX_LENGTH = 8

# GitHub
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_URL = "https://api.github.com"
GITHUB_SCOPE = "repo"

# Sessions
SESSION_COOKIE_NAME = "repogate_session"
SESSION_SALT = "repogate-session-v1"
SESSION_TTL_SECONDS = 60 * 60 * 24
SESSION_ID_BYTES = 32
SESSION_SWEEP_PERIOD_SECONDS = 600

# Repository list cache
REPO_CACHE_TTL_SECONDS = 100
REPO_CACHE_CHECK_PERIOD_SECONDS = 120
SHARED_REPO_CACHE_KEY = "repos"

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
