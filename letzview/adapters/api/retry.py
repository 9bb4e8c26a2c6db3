"""
Relance des appels au service de traduction amont quand il limite le débit.

Seule une réponse 429 déclenche une relance. L'attente respecte le header
Retry-After quand il est présent (plafonné à max_wait), sinon elle suit un
backoff exponentiel avec jitter. Les opérations du catalogue ne passent
jamais par ce module.

Usage:
    response = await send_with_retry(client, "POST", url, json=payload)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Le service amont a répondu 429 Too Many Requests.

    Attributes:
        retry_after: Secondes demandées par le header Retry-After, ou None
    """

    def __init__(self, retry_after: Optional[float] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _retry_after(response: httpx.Response) -> Optional[float]:
    try:
        return max(0.0, float(response.headers["Retry-After"]))
    except (KeyError, ValueError):
        return None


def _throttle_wait(max_wait: float):
    """Attente : Retry-After si fourni, sinon backoff exponentiel."""
    backoff = wait_random_exponential(multiplier=0.5, max=max_wait)

    def wait(retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception()
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return min(error.retry_after, max_wait)
        return backoff(retry_state)

    return wait


def _log_throttled(retry_state: RetryCallState) -> None:
    logger.warning(
        "Service de traduction saturé, nouvelle tentative",
        attempt=retry_state.attempt_number,
        wait=round(retry_state.next_action.sleep, 2),
    )


def throttle_retry(max_attempts: int = 3, max_wait: float = 10) -> AsyncRetrying:
    """
    Politique de relance sur RateLimitError.

    Args:
        max_attempts: Nombre total de tentatives
        max_wait: Attente maximale entre deux tentatives (secondes)
    """
    return AsyncRetrying(
        retry=retry_if_exception_type(RateLimitError),
        wait=_throttle_wait(max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_throttled,
        reraise=True,
    )


async def send_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    max_wait: float = 10,
    **kwargs,
) -> httpx.Response:
    """
    Envoie une requête en relançant les 429.

    Les autres codes d'erreur sont retournés tels quels : l'appelant lit
    le message d'erreur dans le corps de la réponse.

    Raises:
        RateLimitError: Toujours 429 après la dernière tentative
        httpx.TransportError: Erreur réseau, propagée sans relance
    """
    async for attempt in throttle_retry(max_attempts, max_wait):
        with attempt:
            response = await client.request(method, url, **kwargs)
            if response.status_code == 429:
                raise RateLimitError(_retry_after(response))
    return response
