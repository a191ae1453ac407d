"""Sender adapters implementing EventSenderPort."""

from eventlogger.adapters.sender.http import HttpEventSender

__all__ = ["HttpEventSender"]
