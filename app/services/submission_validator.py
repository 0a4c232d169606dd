"""
Per-step validation of the company creation / management wizard.

The wizard has three data steps; errors are grouped by step so the client
can jump to the first broken step while keeping everything already typed.
"""
from datetime import datetime, timezone
from typing import Dict

from email_validator import EmailNotValidError, validate_email

from app.core.exceptions import SubmissionValidationException
from app.models.company import SIZE_BUCKETS
from app.models.company_certification import CERTIFICATIONS
from app.models.company_service_tag import SERVICE_TYPES
from app.schemas.company import CompanySubmission

STEP_BASIC_INFO = "basic_info"
STEP_COMPANY_DETAILS = "company_details"
STEP_SERVICES = "services"

MIN_YEAR_FOUNDED = 1800


def _basic_info_errors(data: CompanySubmission) -> Dict[str, str]:
    errors = {}
    if not data.name:
        errors["name"] = "Company name is required"
    if not data.description:
        errors["description"] = "Description is required"
    if not data.website_url:
        errors["website_url"] = "Website URL is required"
    return errors


def _company_details_errors(data: CompanySubmission) -> Dict[str, str]:
    errors = {}
    if not data.hq_city:
        errors["hq_city"] = "City is required"
    if not data.hq_state:
        errors["hq_state"] = "State is required"
    if not data.phone:
        errors["phone"] = "Phone is required"

    if not data.sales_email:
        errors["sales_email"] = "Sales email is required"
    else:
        try:
            validate_email(data.sales_email, check_deliverability=False)
        except EmailNotValidError:
            errors["sales_email"] = "Sales email is not a valid email address"

    if not data.size_bucket:
        errors["size_bucket"] = "Company size is required"
    elif data.size_bucket not in SIZE_BUCKETS:
        errors["size_bucket"] = "Unknown company size"

    if data.year_founded is not None:
        this_year = datetime.now(timezone.utc).year
        if not MIN_YEAR_FOUNDED <= data.year_founded <= this_year:
            errors["year_founded"] = f"Year founded must be between {MIN_YEAR_FOUNDED} and {this_year}"
    return errors


def _services_errors(data: CompanySubmission) -> Dict[str, str]:
    errors = {}
    if not data.services:
        errors["services"] = "At least one service is required"
    else:
        unknown = [s for s in data.services if s not in SERVICE_TYPES]
        if unknown:
            errors["services"] = f"Unknown services: {', '.join(unknown)}"

    unknown_certs = [c for c in data.certifications if c not in CERTIFICATIONS]
    if unknown_certs:
        errors["certifications"] = f"Unknown certifications: {', '.join(unknown_certs)}"

    if not data.locations_served:
        errors["locations_served"] = "At least one location is required"
    return errors


STEPS = (
    (STEP_BASIC_INFO, _basic_info_errors),
    (STEP_COMPANY_DETAILS, _company_details_errors),
    (STEP_SERVICES, _services_errors),
)


def collect_step_errors(data: CompanySubmission) -> Dict[str, Dict[str, str]]:
    """Errors keyed by step name; steps without errors are omitted."""
    step_errors = {}
    for step_name, check in STEPS:
        errors = check(data)
        if errors:
            step_errors[step_name] = errors
    return step_errors


def validate_submission(data: CompanySubmission) -> None:
    """
    Raises:
        SubmissionValidationException: If any step has errors.
    """
    step_errors = collect_step_errors(data)
    if step_errors:
        raise SubmissionValidationException(step_errors)
