class ApplicationError(Exception):
    """Base for lifecycle rule violations; routers map subclasses to HTTP status codes."""

    status_code = 400
    detail = "Invalid application request"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class OfferNotFoundError(ApplicationError):
    status_code = 404
    detail = "Job offer or positions not found"


class InvalidCompanyError(ApplicationError):
    status_code = 400
    detail = "companyId does not match the offer's company"


class AlreadyAppliedError(ApplicationError):
    status_code = 400
    detail = "You have already applied to this offer"


class ApplicationNotFoundError(ApplicationError):
    status_code = 404
    detail = "Application not found"


class PositionNotFoundError(ApplicationError):
    status_code = 404
    detail = "Application or position not found"


class NotApplicationOwnerError(ApplicationError):
    status_code = 403
    detail = "Application belongs to another company"


class OfferUnavailableError(ApplicationError):
    status_code = 404
    detail = "Job offer no longer available"


class NoPositionsSelectedError(ApplicationError):
    status_code = 400
    detail = "Select at least one position"


class OwnOfferError(ApplicationError):
    status_code = 400
    detail = "You cannot apply to your own job offer"


class ApplicationAccessError(ApplicationError):
    status_code = 403
    detail = "Not allowed to view this application"
