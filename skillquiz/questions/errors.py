class QuestionSourcingError(Exception):
    pass


class SourceUnavailableError(QuestionSourcingError):
    pass


class MalformedRecordError(QuestionSourcingError):
    pass


class InvalidQuestionError(QuestionSourcingError, ValueError):
    pass
