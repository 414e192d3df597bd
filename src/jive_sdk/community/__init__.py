"""Community records, lookups, authenticated requests and registration."""

from jive_sdk.community.models import Community, OAuthTokens, parse_jive_community

__all__ = ["Community", "OAuthTokens", "parse_jive_community"]
