"""Backend for a "coming soon" landing page: launch-notification signups,
site config for the countdown, and a small admin API."""

__version__ = "1.0.0"
