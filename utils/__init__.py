from .logging_utils import get_logger
