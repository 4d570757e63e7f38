import logging
from typing import Optional

from spendwise.contracts.analysis_record import AnalysisRecord, RecordIdFactory
from spendwise.contracts.document import ParsedDocument
from spendwise.core.analysis import grammar
from spendwise.core.analysis.invoker import DEFAULT_TEMPERATURE, AnalysisInvoker
from spendwise.core.analysis.parser import SectionParser
from spendwise.core.analysis.request_builder import RequestBuilder
from spendwise.core.errors import (
    AnalysisInProgress,
    GenerationError,
    InputError,
    UnsupportedLanguageError,
)
from spendwise.core.history.store import HistoryStore
from spendwise.infrastructure.llm.adapter import LLMAdapter
from spendwise.infrastructure.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Application control flow for one user session.

    State:
    - is_analyzing: at most one request in flight, no queue
    - error: the single visible error message, cleared on the next attempt
    - current: the analysis being shown
    """

    def __init__(
        self,
        invoker: AnalysisInvoker,
        history: HistoryStore,
        request_builder: Optional[RequestBuilder] = None,
        parser: Optional[SectionParser] = None,
        id_factory: Optional[RecordIdFactory] = None,
    ):
        self.invoker = invoker
        self.history = history
        self.request_builder = request_builder or RequestBuilder()
        self.parser = parser or SectionParser()
        self.id_factory = id_factory or RecordIdFactory()

        self.is_analyzing = False
        self.error: Optional[str] = None
        self.current: Optional[AnalysisRecord] = None

    @classmethod
    def from_config(cls, kv: KeyValueStore, models_config_path: Optional[str] = None) -> "AnalysisService":
        llm = LLMAdapter(models_config_path)
        temperature = llm.profile.get("params", {}).get("temperature", DEFAULT_TEMPERATURE)

        history = HistoryStore(kv)
        history.load()

        return cls(invoker=AnalysisInvoker(llm, temperature=temperature), history=history)

    def analyze(self, raw_text: str, target_language: str = grammar.NO_TRANSLATION_LANGUAGE) -> AnalysisRecord:
        if self.is_analyzing:
            raise AnalysisInProgress()

        self.error = None
        self.current = None

        try:
            self._validate(raw_text, target_language)
        except InputError as e:
            self.error = str(e)
            raise

        self.is_analyzing = True
        try:
            prompt = self.request_builder.build(raw_text, target_language)
            output = self.invoker.invoke(prompt)
        except GenerationError as e:
            self.error = str(e)
            raise
        finally:
            self.is_analyzing = False

        record_id, timestamp = self.id_factory.next()
        record = AnalysisRecord(
            id=record_id,
            raw_text=raw_text,
            formatted_output=output,
            timestamp=timestamp,
        )

        self.history.append(record)
        self.current = record

        logger.info("Analysis %s stored (%d in history)", record.id, len(self.history))
        return record

    def select(self, record_id: str) -> Optional[AnalysisRecord]:
        record = self.history.find(record_id)
        if record is not None:
            self.current = record
        return record

    def clear_current(self) -> None:
        self.current = None

    def clear_history(self) -> None:
        self.history.clear()

    def parsed(self, record: Optional[AnalysisRecord] = None) -> Optional[ParsedDocument]:
        record = record or self.current
        if record is None:
            return None
        return self.parser.parse(record.formatted_output)

    @staticmethod
    def _validate(raw_text: str, target_language: str) -> None:
        if not raw_text or not raw_text.strip():
            raise InputError()
        if not grammar.is_supported_language(target_language):
            raise UnsupportedLanguageError(target_language)
