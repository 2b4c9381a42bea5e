class ConfigurationError(Exception):
    pass


class NotFoundError(Exception):
    pass
