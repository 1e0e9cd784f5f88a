from .declarative import Declarative, Meta  # noqa
