# fizzbuzz/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler


class ParameterValidationError(APIException):
    """One or more /list parameters are missing or invalid; detail holds every message, one per line."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "invalid parameters"
    default_code = "invalid_parameters"


class NoParameterExpectedError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "this endpoint does not accept parameter"
    default_code = "no_parameter_expected"


class NoDataError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "there isn't any saved request yet"
    default_code = "no_data"


class PersistenceError(APIException):
    """The database failed while serving a request. Only that request is aborted."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "internal server error"
    default_code = "persistence_error"


def plain_text_exception_handler(exc, context):
    """DRF default handling, with the error detail flattened to a single text body."""
    response = exception_handler(exc, context)
    if response is None:
        return None
    data = response.data
    if isinstance(data, dict) and "detail" in data:
        data = data["detail"]
    elif isinstance(data, list):
        data = "\n".join(str(d) for d in data)
    response.data = f"{data}\n"
    return response
