from __future__ import annotations


class AnalysisPipelineError(RuntimeError):
    status_code = 500
    code = "analysis_failed"

    def __init__(self, message: str, *, stage: str | None = None):
        super().__init__(message)
        self.stage = stage

    @property
    def public_message(self) -> str:
        if self.stage:
            return f"{self.stage} processing failed: {self}"
        return str(self)


class ConfigurationError(AnalysisPipelineError):
    code = "server_configuration"


class InputError(AnalysisPipelineError):
    status_code = 400
    code = "invalid_input"


class MissingDocuments(InputError):
    code = "missing_documents"


class FileValidationError(AnalysisPipelineError):
    status_code = 400
    code = "invalid_file"


class UnsupportedFileType(FileValidationError):
    code = "unsupported_file_type"


class FileTooLarge(FileValidationError):
    code = "file_too_large"


class NotFoundError(AnalysisPipelineError):
    status_code = 404
    code = "not_found"


class ExtractionError(AnalysisPipelineError):
    code = "extraction_failed"


class ParseError(AnalysisPipelineError):
    code = "parse_failed"


class NoJSONFound(ParseError):
    code = "no_json_found"


class JSONParseFailed(ParseError):
    code = "json_parse_failed"

    def __init__(self, message: str, *, cleaned_text: str, stage: str | None = None):
        super().__init__(message, stage=stage)
        self.cleaned_text = cleaned_text


class AnalysisError(AnalysisPipelineError):
    code = "analysis_failed"


class UnexpectedError(AnalysisPipelineError):
    code = "unexpected"

    @property
    def public_message(self) -> str:
        return f"Analysis failed: {self}"
