"""za: keeps Yesterday/Tomorrow/Standup links in daily notes pointing at real notes."""

__version__ = "0.1.0"
