from collections.abc import Iterable
from decimal import Decimal

from advert_api.domain.entities.advert import Activate, AdvertSubmission, ConfirmationOutcome, Reject

DEFAULT_REQUIRED_FIELDS: frozenset[str] = frozenset({"title"})

# Column limits of the adverts table.
MAX_TITLE_LENGTH = 512
MAX_USER_NAME_LENGTH = 256
PRICE_PRECISION = 12
PRICE_SCALE = 2

_MAX_PRICE = Decimal(10) ** (PRICE_PRECISION - PRICE_SCALE)
_PRICE_QUANTUM = Decimal(1).scaleb(-PRICE_SCALE)


def validate_submission(
    submission: AdvertSubmission,
    required_fields: Iterable[str] = DEFAULT_REQUIRED_FIELDS,
) -> list[str]:
    """Return a list of problems with the submission; empty means well-formed."""
    problems: list[str] = []

    for name in sorted(set(required_fields)):
        if not hasattr(submission, name):
            problems.append(f"Unknown required field '{name}'")
            continue
        value = getattr(submission, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            problems.append(f"Field '{name}' is required")

    if isinstance(submission.title, str) and len(submission.title) > MAX_TITLE_LENGTH:
        problems.append(f"Field 'title' must be at most {MAX_TITLE_LENGTH} characters")
    if isinstance(submission.user_name, str) and len(submission.user_name) > MAX_USER_NAME_LENGTH:
        problems.append(f"Field 'user_name' must be at most {MAX_USER_NAME_LENGTH} characters")

    price = submission.price
    if not isinstance(price, Decimal) or not price.is_finite():
        problems.append("Field 'price' must be a decimal")
    elif price < 0:
        problems.append("Field 'price' must not be negative")
    elif price >= _MAX_PRICE:
        problems.append(f"Field 'price' must be below {_MAX_PRICE}")
    elif price != price.quantize(_PRICE_QUANTUM):
        problems.append(f"Field 'price' must have at most {PRICE_SCALE} decimal places")

    return problems


def validate_outcome(outcome: ConfirmationOutcome) -> list[str]:
    if isinstance(outcome, Reject):
        return []
    if isinstance(outcome, Activate):
        if not outcome.file_path or not outcome.file_path.strip():
            return ["Activation requires a non-empty file path"]
        return []
    return [f"Unsupported confirmation outcome: {type(outcome).__name__}"]
