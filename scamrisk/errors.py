"""Exception types raised for programming errors (bad config, use after close).

Inference and vocabulary failures are never raised; they surface as
statuses on the returned results.
"""


class ScamRiskError(Exception):
    pass


class ConfigError(ScamRiskError, ValueError):
    pass


class AssetNotFoundError(ScamRiskError, FileNotFoundError):
    pass


class ClassifierClosedError(ScamRiskError, RuntimeError):
    pass
