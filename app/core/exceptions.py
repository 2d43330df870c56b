# app/core/exceptions.py

"""
Error taxonomy shared by the resolver, the service and the stores.

Every error is raised by the core and propagated unchanged; the status
code is only what the HTTP boundary renders for that kind.
"""

from fastapi import HTTPException, status


class MfaProviderServiceError(HTTPException):
    def __init__(self, detail="An error occurred", status_code=status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class AuthenticationError(MfaProviderServiceError):
    def __init__(self, detail="Authentication failed"):
        super().__init__(detail=detail, status_code=status.HTTP_401_UNAUTHORIZED)


class AuthorizationError(MfaProviderServiceError):
    def __init__(self, detail="Insufficient scope for the requested identity zone"):
        super().__init__(detail=detail, status_code=status.HTTP_403_FORBIDDEN)


class ValidationError(MfaProviderServiceError):
    def __init__(self, detail="Invalid MFA provider"):
        super().__init__(detail=detail, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


class UnsupportedTypeError(ValidationError):
    def __init__(self, provider_type):
        super().__init__(detail=f"Unsupported MFA provider type: {provider_type}")


class ConflictError(MfaProviderServiceError):
    def __init__(self, detail="An MFA provider with that name already exists in this zone"):
        super().__init__(detail=detail, status_code=status.HTTP_409_CONFLICT)


class NotFoundError(MfaProviderServiceError):
    def __init__(self, detail="MFA provider not found"):
        super().__init__(detail=detail, status_code=status.HTTP_404_NOT_FOUND)


class StorageError(MfaProviderServiceError):
    def __init__(self, detail="MFA provider storage is unavailable"):
        super().__init__(detail=detail, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
