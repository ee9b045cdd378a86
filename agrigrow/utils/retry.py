# agrigrow/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from agrigrow.domain.errors import ConcurrentModification
from agrigrow.utils.settings import CART_WRITE_ATTEMPTS


# a lost version-checked write re-reads the cart and tries again
def conflict_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(CART_WRITE_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(ConcurrentModification),
    )
