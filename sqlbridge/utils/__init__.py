from sqlbridge.utils import logging, text

__all__ = ("logging", "text")
