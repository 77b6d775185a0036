class QuizSyncError(Exception):
    """Base class for errors raised by the quiz sync agent."""


class MarkupContractError(QuizSyncError):
    """The rendered page does not have the structure the agent relies on."""
