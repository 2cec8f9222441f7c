class SprigError(Exception):
    """Base class for every error raised by the sprig compiler."""


class ConfigError(SprigError):
    """Raised when the configuration file cannot be parsed."""


class TemplateSyntaxError(SprigError):
    def __init__(self, path, errors):
        self.path = path
        self.errors = list(errors)
        details = "\n".join(f"  {error}" for error in self.errors)
        super().__init__(f"Template for '{path}' has {len(self.errors)} parse error(s):\n{details}")


class RoutePolicyError(SprigError):
    def __init__(self, route_path):
        self.route_path = route_path
        super().__init__(
            f'Route "{route_path}" has interactive bindings (events or two-way) but routes are server components.\n'
            "Move interactive logic to an island component (island: true)."
        )
