from .dispatcher import UNHANDLED_EVENT_MESSAGE, Dispatcher

__all__ = ["Dispatcher", "UNHANDLED_EVENT_MESSAGE"]
