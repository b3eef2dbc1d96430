from ninja_extra.throttling import AnonRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "60/min"


class UserDefaultThrottle(UserRateThrottle):
    rate = "300/min"


class AuthThrottle(AnonRateThrottle):
    rate = "20/min"


class WriteThrottle(UserRateThrottle):
    rate = "120/min"


class LookupThrottle(UserRateThrottle):
    """Participant lookups fan out to up to three external registries."""

    scope = "lookup"
    rate = "60/min"


class WebhookThrottle(AnonRateThrottle):
    rate = "120/min"
