class ConfigError(ValueError):
    """Raised when configuration data is malformed. Never raised per render."""

class ExcerptRuleError(ConfigError):
    pass

class SiteConfigError(ConfigError):
    pass
