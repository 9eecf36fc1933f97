"""
Output record models.

``OptimizerOutput`` is what the assembler hands back to a caller: the
rendered documents plus the recommendation lists.

The Redis document lives in its own optional slot (``object_cache``) rather
than in the ``documents`` mapping, so "Redis disabled" is an explicit
``None`` that callers must check instead of an empty string they might
write to disk by accident.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from woo_optimizer.taxonomy.server_taxonomy import DocumentName


class DocumentUnavailableError(KeyError):
    """Raised when a document is requested that this output does not contain.

    Attributes:
        name: The requested document.
    """

    def __init__(self, name: DocumentName, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Document '{name}' is not available: {reason}")

    def __str__(self) -> str:
        return self.args[0]


class GeneratedDocument(BaseModel):
    """One rendered configuration file.

    Attributes:
        name: Stable document identifier.
        title: Human-readable title for listings.
        filename: Suggested file name when written to disk.
        body: Full file contents.
    """

    model_config = ConfigDict(frozen=True)

    name: DocumentName
    title: str
    filename: str
    body: str


class PluginRecommendation(BaseModel):
    """A WordPress plugin or external service recommendation.

    ``required`` is computed from the server profile (e.g. a page-cache plugin
    is only required when Varnish is not doing page caching).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    purpose: str
    required: bool
    url: str


class VerificationCommand(BaseModel):
    """A shell command to run after applying the configs, with what it checks."""

    model_config = ConfigDict(frozen=True)

    label: str
    command: str


class Recommendations(BaseModel):
    """Categorised operational recommendations.

    Attributes:
        plugins: Plugin/tool entries with a computed required flag.
        monitoring: Monitoring tools, "Name - purpose".
        maintenance: Recurring server maintenance tasks.
        woocommerce: WooCommerce-specific optimisation tips.
        database: Database maintenance tasks.
        verification: Labelled commands to check each service after applying.
        rollout: Ordered steps for putting the generated configs in place.
    """

    model_config = ConfigDict(frozen=True)

    plugins: list[PluginRecommendation]
    monitoring: list[str]
    maintenance: list[str]
    woocommerce: list[str]
    database: list[str]
    verification: list[VerificationCommand]
    rollout: list[str]

    @property
    def required_plugins(self) -> list[PluginRecommendation]:
        return [p for p in self.plugins if p.required]


class OptimizerOutput(BaseModel):
    """Everything produced for one server profile.

    Attributes:
        documents: Always-present documents keyed by name, in canonical order.
        object_cache: The Redis document, or ``None`` when Redis is disabled.
        recommendations: Recommendation lists.
    """

    model_config = ConfigDict(frozen=True)

    documents: dict[DocumentName, GeneratedDocument]
    object_cache: Optional[GeneratedDocument] = None
    recommendations: Recommendations

    @property
    def has_object_cache(self) -> bool:
        return self.object_cache is not None

    def get(self, name: DocumentName | str) -> GeneratedDocument:
        """Return one document by name.

        Raises:
            DocumentUnavailableError: For the Redis document when Redis is disabled.
            ValueError: If ``name`` is not a known document name.
        """
        name = DocumentName(name)
        if name is DocumentName.REDIS:
            if self.object_cache is None:
                raise DocumentUnavailableError(name, "object cache (Redis) is disabled")
            return self.object_cache
        return self.documents[name]

    def all_documents(self) -> list[GeneratedDocument]:
        """All present documents in canonical ``DocumentName`` order."""
        docs: list[GeneratedDocument] = []
        for name in DocumentName:
            if name is DocumentName.REDIS:
                if self.object_cache is not None:
                    docs.append(self.object_cache)
            else:
                docs.append(self.documents[name])
        return docs
