from __future__ import annotations

from abc import ABC, abstractmethod
from lexisent.core.models import SentimentResult

class SentimentClient(ABC):
    @abstractmethod
    def analyze(self, text: str) -> SentimentResult:
        raise NotImplementedError
