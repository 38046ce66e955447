"""
Chat session - startup, status messages and the question/answer loop.

Startup order:
1. Load the corpus (fatal to search if it fails, but never raises)
2. Build the keyword index synchronously; the session is usable from here
3. Kick off the model index build in the background, if a backend is set

The transcript is a plain list of Messages; rendering it is the caller's job.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal

from opentelemetry import trace

from experience_chat.chat.answer import synthesize_answer, topic_areas
from experience_chat.config import ChatConfig, get_config
from experience_chat.embeddings.services import get_embedding_service
from experience_chat.knowledge.document import Document
from experience_chat.knowledge.loader import KnowledgeBaseError, aload_knowledge_base
from experience_chat.knowledge.seeds import get_experience_documents
from experience_chat.observability.attributes import KB_DOCUMENT_COUNT, KB_SOURCE
from experience_chat.observability.tracing import get_tracer
from experience_chat.search.orchestrator import ModelStatus, SearchOrchestrator, ServiceFactory

logger = logging.getLogger(__name__)

KB_UNAVAILABLE_MESSAGE = (
    "I couldn't load my knowledge base, so I can't answer questions right now. "
    "Please try again later."
)
MODEL_UNAVAILABLE_MESSAGE = (
    "Semantic search is unavailable; answering with keyword matching instead."
)

Role = Literal["user", "bot", "system"]


@dataclass(frozen=True)
class Message:
    """One transcript entry."""
    role: Role
    text: str


class ChatSession:
    """
    One user's conversation with the experience chatbot.

    Example:
        session = ChatSession(config)
        await session.start()
        reply = await session.ask("Have you worked with LLMs?")
    """

    def __init__(
        self,
        config: ChatConfig | None = None,
        service_factory: ServiceFactory | None = None,
        tracer: trace.Tracer | None = None,
    ):
        self.config = config or get_config()
        self._service_factory = service_factory or self._default_service_factory()
        self._tracer = tracer or get_tracer()
        self.orchestrator: SearchOrchestrator | None = None
        self.topics: list[str] = []
        self.transcript: list[Message] = []
        self.input_enabled = False

    def _default_service_factory(self) -> ServiceFactory | None:
        if not self.config.model_enabled:
            return None
        backend, model = self.config.embedding_backend, self.config.embedding_model
        return lambda: get_embedding_service(backend, model)

    @property
    def source(self) -> str:
        return self.config.kb_path or "packaged sample corpus"

    async def _load_corpus(self) -> list[Document]:
        if self.config.kb_path:
            return await aload_knowledge_base(self.config.kb_path, self.config.fetch_timeout)
        return get_experience_documents()

    async def start(self) -> bool:
        """
        Load the corpus and get ready to answer.

        Returns:
            True if questions can be answered; False if the knowledge base
            failed to load (input is disabled and a system message explains)
        """
        if self.orchestrator is not None:
            return True

        with self._tracer.start_as_current_span(
            "experience_chat.load_corpus",
            attributes={KB_SOURCE: self.source},
        ) as span:
            try:
                corpus = await self._load_corpus()
            except KnowledgeBaseError as e:
                logger.error(f"Failed to load knowledge base: {e}")
                span.record_exception(e)
                self.input_enabled = False
                self._post("system", KB_UNAVAILABLE_MESSAGE)
                return False
            span.set_attribute(KB_DOCUMENT_COUNT, len(corpus))

        self.orchestrator = SearchOrchestrator.from_corpus(corpus, self.config, self._tracer)
        self.topics = topic_areas(corpus)
        self.input_enabled = True
        logger.info(f"Knowledge base ready: {len(corpus)} entries from {self.source}")

        topics = ", ".join(self.topics) or "my experience"
        self._post("system", f"Loaded {len(corpus)} experience entries. Ask about {topics}.")

        if self._service_factory is not None:
            task = self.orchestrator.start_model_build(self._service_factory)
            task.add_done_callback(self._on_model_settled)
        return True

    def _on_model_settled(self, task: asyncio.Task[bool]) -> None:
        if task.cancelled():
            return
        if self.orchestrator.model_status is ModelStatus.UNAVAILABLE:
            self._post("system", MODEL_UNAVAILABLE_MESSAGE)

    async def wait_for_model(self) -> ModelStatus:
        """Wait until the background model build (if any) has settled."""
        if self.orchestrator is None:
            return ModelStatus.ABSENT
        status = await self.orchestrator.wait_for_model()
        # Let the done-callback post its status message before returning.
        await asyncio.sleep(0)
        return status

    async def ask(self, text: str) -> Message | None:
        """
        Answer one question and append both sides to the transcript.

        Returns:
            The bot reply, or None for blank input
        """
        text = (text or "").strip()
        if not text:
            return None

        self._post("user", text)
        if not self.input_enabled or self.orchestrator is None:
            return self._post("bot", KB_UNAVAILABLE_MESSAGE)

        hits = await self.orchestrator.search(text)
        return self._post("bot", synthesize_answer(text, hits, self.topics))

    def _post(self, role: Role, text: str) -> Message:
        message = Message(role=role, text=text)
        self.transcript.append(message)
        return message
