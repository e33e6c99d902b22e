class MazeCrawlError(Exception):
    """Base exception for the Maze Crawl project."""


class MazeConfigError(MazeCrawlError, ValueError):
    """Raised when a maze is requested with unusable dimensions or preset."""


class SessionStateError(MazeCrawlError):
    """Raised when a session operation is not legal in the current state."""


class SettingsError(MazeCrawlError):
    """Raised when a settings file cannot be written."""
