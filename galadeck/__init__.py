"""GalaDeck: an editable slide-deck presenter for a scripted gala show."""

__version__ = "0.1.0"
