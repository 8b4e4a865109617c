def _exception_from_packed_args(exception_cls, args=None, kwargs=None):
    # Exceptions that only accept kwargs cannot be rebuilt from positional args alone,
    # which is what the default __reduce__ provides.
    if args is None:
        args = ()
    if kwargs is None:
        kwargs = {}
    return exception_cls(*args, **kwargs)


class ApplicationError(Exception):
    """
    The base exception class for application errors.

    Keyword arguments render the message template and are kept in `kwargs`,
    so callers can tell which field, variable or file caused the error.

    :ivar message: The descriptive message associated with the error.
    """

    template = "{message}"
    """Message template"""
    message: str
    """Rendered message template"""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.message = self.template.format(**kwargs)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.message} ({self.__class__.__name__})"

    def __reduce__(self):
        return _exception_from_packed_args, (self.__class__, None, self.kwargs)


class MissingRequiredFieldError(ApplicationError):
    """
    A structurally required key is absent.

    :ivar field: The name of the missing field.
    :ivar block: A description of the block expected to contain it.
    """

    template = "Missing required field '{field}' in {block}"


class UnresolvableReferenceError(ApplicationError):
    """
    A name refers to an entry that is not defined.

    :ivar kind: The kind of entry referenced (cluster, user, context).
    :ivar name: The unknown name.
    """

    template = "Unable to find {kind} named '{name}'"


class MissingEnvironmentVariableError(ApplicationError):
    """
    :ivar env_var: The name of the undefined environment variable.
    """

    template = "Environment variable {env_var} must be defined"


class ConfigFileNotFoundError(ApplicationError):
    """
    A file could not be found.

    :ivar description: What the file was expected to contain.
    :ivar path: The path that the application attempted to read.
    """

    template = "Unable to find {description} at path: {path}"


class FileReadError(ApplicationError):
    """
    A file exists but could not be read.

    :ivar description: What the file was expected to contain.
    :ivar path: The path that the application attempted to read.
    :ivar reason: The underlying OS error.
    """

    template = "Unable to read {description} at path: {path} ({reason})"


class DateParseError(ApplicationError):
    """
    :ivar value: The string that matched none of the accepted formats.
    """

    template = "'{value}' could not be parsed as a date time string"


class MalformedDocumentError(ApplicationError):
    """
    A document does not have the expected shape.

    :ivar reason: What is wrong with the document.
    """

    template = "Malformed kubeconfig document: {reason}"


class ValidationError(ApplicationError):
    """
    An exception occurred validating parameters.

    :ivar value: The value that was being validated.
    :ivar param: The parameter that failed validation.
    :ivar type_name: The name of the underlying type.
    """

    template = "Invalid value '{value}' for param {param} of type {type_name}"
