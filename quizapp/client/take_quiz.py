# quizapp/client/take_quiz.py
"""
Take-quiz session controller.

Runs on the test-taker's side: fetches the redacted quiz, keeps the answers
the student has given so far, counts the quiz timer down once per tick and
submits on expiry. The submission is sent at most once per session, whether
it comes from the student or from the timer.
"""

import logging
import threading
import time
from typing import Callable, List, Optional, Union

import httpx

from quizapp.core.config import settings

logger = logging.getLogger(__name__)

UNANSWERED = -1

Response = Union[int, str]


class SessionError(Exception):
    pass


def make_client(token: str, base_url: str | None = None) -> httpx.Client:
    return httpx.Client(
        base_url=base_url or settings.API_BASE_URL,
        headers={"Authorization": f"Bearer {token}"},
        timeout=settings.CLIENT_TIMEOUT_SECONDS,
    )


class TakeQuizSession:
    def __init__(
        self,
        client: httpx.Client,
        quiz_id: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.quiz_id = quiz_id
        self._clock = clock

        self.quiz: Optional[dict] = None
        self.responses: List[Response] = []
        self.time_left = 0
        self.result: Optional[dict] = None

        self._started_at: Optional[float] = None
        self._lock = threading.Lock()
        self._claimed = False

    @property
    def started(self) -> bool:
        return self.quiz is not None

    @property
    def submitted(self) -> bool:
        return self._claimed

    def start(self) -> dict:
        """Fetch the take-safe quiz and start the countdown."""
        r = self.client.get(f"/take-quiz/{self.quiz_id}")
        r.raise_for_status()
        self.quiz = r.json()
        self.responses = [
            "" if q["type"] == "essay" else UNANSWERED
            for q in self.quiz["questions"]
        ]
        self.time_left = self.quiz["timer"] * 60
        self._started_at = self._clock()
        logger.info(f"Started quiz {self.quiz_id}: {len(self.responses)} questions, {self.time_left}s")
        return self.quiz

    def answer(self, index: int, value: Response) -> None:
        if not self.started:
            raise SessionError("quiz has not been started")
        if self.submitted:
            raise SessionError("quiz already submitted")
        if not 0 <= index < len(self.responses):
            raise SessionError(f"no question at index {index}")
        self.responses[index] = value

    def time_spent(self) -> int:
        if self._started_at is None:
            return 0
        return max(0, int(self._clock() - self._started_at))

    def tick(self) -> Optional[dict]:
        """
        One second passed. Returns the submission result when this tick
        expired the timer, otherwise None.
        """
        if not self.started or self.submitted or self.time_left <= 0:
            return None
        self.time_left -= 1
        if self.time_left == 0:
            logger.info(f"Timer expired for quiz {self.quiz_id}; submitting")
            return self._submit()
        return None

    def submit(self) -> Optional[dict]:
        """Manual submission; cancels the countdown."""
        if not self.started:
            raise SessionError("quiz has not been started")
        self.time_left = 0
        return self._submit()

    def run(self, sleep: Callable[[float], None] = time.sleep) -> Optional[dict]:
        """Tick once per second until the quiz is submitted."""
        while self.started and not self.submitted and self.time_left > 0:
            sleep(1)
            self.tick()
        return self.result

    def _submit(self) -> Optional[dict]:
        with self._lock:
            if self._claimed:
                return self.result
            self._claimed = True

        payload = {
            "quiz_id": self.quiz_id,
            "responses": list(self.responses),
            "time_spent": self.time_spent(),
        }
        try:
            r = self.client.post("/attempts/", json=payload)
            r.raise_for_status()
        except httpx.HTTPError as e:
            # Let the caller retry; the server keeps at most one attempt anyway
            logger.error(f"Submitting quiz {self.quiz_id} failed: {e}")
            with self._lock:
                self._claimed = False
            raise

        self.result = r.json()["result"]
        logger.info(f"Submitted quiz {self.quiz_id}: score={self.result['score']}")
        return self.result
