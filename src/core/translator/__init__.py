from . import property_translator, request_translator

__all__ = ["property_translator", "request_translator"]
