"""Terminal rendering for the command line front end."""

from .presenters import RichPresenter

__all__ = ["RichPresenter"]
