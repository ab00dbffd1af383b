from enum import Enum


class SessionState(str, Enum):
    """States of a single user's quiz session."""

    empty = "empty"  # Waiting for a topic
    in_progress = "in_progress"  # Questions left to answer
    complete = "complete"  # Every question answered
