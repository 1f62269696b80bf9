# pa_regression/utils/errors.py
class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (config values, malformed examples).
    Should NOT print traceback.
    """


class ConfigurationError(UserInputError):
    """
    Session 初始化失败（aggressiveness <= 0 / unknown variant）。
    Fatal: no session is created.
    """


class SessionFinalizedError(RuntimeError):
    """Raised when an example arrives after end-of-stream."""
