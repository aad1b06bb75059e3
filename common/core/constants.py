from enum import Enum


class Environment(str, Enum):
    """Deployment profiles, selected with the ENVIRONMENT variable."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def exposes_api_docs(self) -> bool:
        # The webhook endpoint is public; its schema is only served locally
        return self == Environment.LOCAL
