"""RFC 9457 Problem Details errors for the HTTP surface.

The reconciliation core never raises: unknown codes pass through, bad
timestamps fall back, and unresolvable references fall to the next valuation
tier. What remains are malformed request bodies and unexpected failures, and
both leave the service as ``application/problem+json``.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..schemas.common import Problem, Violation

PROBLEM_BASE_URI = "https://medtransport.example/problems"
PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetailsException(HTTPException):
    """
    HTTP error carrying an RFC 9457 problem document.

    https://tools.ietf.org/rfc/rfc9457.txt
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        slug: Optional[str] = None,
        instance: Optional[str] = None,
        violations: Optional[list[Violation]] = None,
        extensions: Optional[Dict[str, Any]] = None,
    ):
        """
        Build the problem document.

        Args:
            status_code: HTTP status code
            title: Short summary of the problem type
            detail: Explanation of this occurrence
            slug: Problem type name, appended to PROBLEM_BASE_URI
            instance: Path or URL of the failing request
            violations: Field-level validation failures
            extensions: Extra members merged into the document
        """
        self.problem = Problem(
            type=f"{PROBLEM_BASE_URI}/{slug}" if slug else "about:blank",
            title=title,
            status=status_code,
            detail=detail,
            instance=instance,
            violations=violations,
        )
        self.problem_details = self.problem.model_dump(mode="json", exclude_none=True)
        self.problem_details.update(extensions or {})

        super().__init__(status_code=status_code, detail=self.problem_details)

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=self.problem_details,
            media_type=PROBLEM_MEDIA_TYPE,
        )


class RequestValidationProblem(ProblemDetailsException):
    """Request body did not match the endpoint's schema."""

    def __init__(self, violations: list[Violation], instance: Optional[str] = None):
        super().__init__(
            status_code=422,
            title="Validation Error",
            detail=f"The request body failed validation ({len(violations)} violation(s))",
            slug="validation-error",
            instance=instance,
            violations=violations,
        )


class InternalServerError(ProblemDetailsException):
    """Unexpected failure; the error_id ties the response to the server log."""

    def __init__(self, instance: Optional[str] = None, error_id: Optional[str] = None):
        super().__init__(
            status_code=500,
            title="Internal Server Error",
            detail="An unexpected error occurred while processing the request",
            slug="internal-server-error",
            instance=instance,
            extensions={
                "error_id": error_id or str(uuid.uuid4()),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )


def violation_path(loc: tuple) -> str:
    """Dotted field path of a pydantic error location, without FastAPI's ``body`` prefix."""
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) or "$"


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    return exc.to_response()


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every failing field of a request body as a violation."""
    violations = [
        Violation(path=violation_path(tuple(error.get("loc", ()))), message=error.get("msg", "invalid"))
        for error in exc.errors()
    ]
    return RequestValidationProblem(violations, instance=request.url.path).to_response()


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert anything unhandled into a 500 problem document."""
    return InternalServerError(instance=request.url.path).to_response()
