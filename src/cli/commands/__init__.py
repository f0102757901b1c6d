from .reconcile import reconcile
from .request import request
from .update import update

__all__ = ["reconcile", "request", "update"]
