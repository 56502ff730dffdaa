from .json_logging import JsonFormatter, init_logging

__all__ = ["JsonFormatter", "init_logging"]
