"""Errors raised by the analysis modules, each carrying a stable code."""


class ModuleError(Exception):
    """Base error for analysis modules.

    ``code`` is one of the documented error codes (e.g. AI_NOT_CONFIGURED,
    PARSE_ERROR, MAX_RETRIES_EXCEEDED); the API layer maps it to an HTTP status.
    """

    def __init__(self, message: str, code: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause


class UniquenessAnalysisError(ModuleError):
    pass


class ImpactAnalysisError(ModuleError):
    pass


class ContextAnalysisError(ModuleError):
    pass


class CompanyResearchError(ModuleError):
    pass


class SoftSkillsError(ModuleError):
    pass


class ResumeParseError(ModuleError):
    pass
