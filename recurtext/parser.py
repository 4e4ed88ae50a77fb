"""Recurrence phrase → descriptor pipeline.

normalize → split → handlers per segment → combine → defaults → result.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time

from recurtext import config
from recurtext.cache import ResultCache
from recurtext.config import ParserSettings
from recurtext.errors import PatternCombinationError
from recurtext.models import Frequency, ParseResult, RecurrenceOptions
from recurtext.nlp.dates import DateparserResolver, DateResolver
from recurtext.nlp.document import DocumentFactory, TextDocument
from recurtext.nlp.normalizer import NormalizeOptions, normalize
from recurtext.nlp.splitter import split
from recurtext.patterns import HandlerContext, PatternCombiner, PatternResult, get_handlers

logger = logging.getLogger(__name__)

# Confidence ceiling for results rebuilt after a failed combination
FALLBACK_CONFIDENCE = 0.3

NO_MATCH_WARNING = "No recurrence pattern recognized"


def _as_datetime(anchor: datetime | date | None) -> datetime:
    if anchor is None:
        return datetime.now()
    if isinstance(anchor, datetime):
        return anchor
    return datetime.combine(anchor, time.min)


class RecurrenceParser:
    """Turns natural-language recurrence phrases into :class:`ParseResult` objects.

    The cache is owned by the caller and may be shared between parsers.
    Without one, a private cache of ``settings.cache_size`` entries is used
    when ``settings.use_cache`` is set.
    """

    def __init__(
        self,
        settings: ParserSettings | None = None,
        *,
        cache: ResultCache[ParseResult] | None = None,
        date_resolver: DateResolver | None = None,
        document_factory: DocumentFactory | None = None,
        combiner: PatternCombiner | None = None,
    ) -> None:
        self.settings = settings or config.settings
        self.handlers = get_handlers(self.settings.handlers)
        if cache is None and self.settings.use_cache:
            cache = ResultCache(self.settings.cache_size)
        self.cache = cache
        self.date_resolver = date_resolver or DateparserResolver()
        self.document_factory = document_factory or TextDocument
        self.combiner = combiner or PatternCombiner()
        self._normalize_options = NormalizeOptions(
            correct_misspellings=self.settings.correct_misspellings,
            fuzzy_threshold=self.settings.fuzzy_threshold,
            preserve_ordinal_suffixes=True,
        )
        self._fingerprint = self.settings.model_dump_json()

    def parse(self, text: str, *, anchor: datetime | date | None = None) -> ParseResult:
        """Parse *text*; end dates resolve relative to *anchor* (default: now).

        Unrecognized input gives a result without options and confidence 0.
        Conflicting fragments give a low-confidence fallback, or raise
        PatternCombinationError when ``settings.strict`` is set.
        """
        start = _as_datetime(anchor)
        cache = self.cache if self.settings.use_cache else None
        key = (text, start.date().isoformat(), self._fingerprint)
        if cache is not None:
            cached = cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %r", text)
                return cached

        result = self._parse(text, start)
        if cache is not None:
            cache.put(key, result)
        return result

    def _parse(self, text: str, anchor: datetime) -> ParseResult:
        normalized = normalize(text, self._normalize_options)
        logger.debug("Normalized %r -> %r", text, normalized)
        if not normalized:
            return ParseResult(warnings=(NO_MATCH_WARNING,))

        context = HandlerContext(anchor=anchor, date_resolver=self.date_resolver)
        results: list[PatternResult] = []
        unmatched: list[str] = []
        for segment in split(normalized).segments:
            segment_results = self._match_segment(segment, context)
            if not segment_results:
                unmatched.append(segment)
            results.extend(segment_results)

        if not results:
            return ParseResult(normalized_text=normalized, warnings=(NO_MATCH_WARNING,))

        warnings = [warning for result in results for warning in result.warnings]
        warnings.extend(f"Ignored unrecognized text {segment!r}" for segment in unmatched)
        # an unreadable end clause alone sets nothing
        if not any(result.set_fields for result in results):
            return ParseResult(
                normalized_text=normalized, warnings=(*warnings, NO_MATCH_WARNING)
            )
        confidence = min(result.confidence for result in results)

        try:
            options = self.combiner.combine(results)
        except PatternCombinationError as exc:
            if self.settings.strict:
                raise
            options = self._fallback(results)
            logger.warning("Pattern combination failed for %r, using fallback: %s", text, exc)
            warnings.append(str(exc))
            confidence = min(confidence, FALLBACK_CONFIDENCE)

        return ParseResult(
            options=self._apply_defaults(options),
            matched_patterns=tuple(dict.fromkeys(result.handler for result in results)),
            confidence=confidence,
            warnings=tuple(warnings),
            normalized_text=normalized,
        )

    def _match_segment(self, segment: str, context: HandlerContext) -> list[PatternResult]:
        doc = self.document_factory(segment)
        matches: list[PatternResult] = []
        for handler in self.handlers:
            result = handler.apply(doc, context)
            if result is not None:
                logger.debug("%s matched %r in %r", handler.name, result.matched_text, segment)
                matches.append(result)
        return matches

    @staticmethod
    def _fallback(results: list[PatternResult]) -> RecurrenceOptions:
        best = max(results, key=lambda result: (result.priority, result.confidence))
        return best.options

    def _apply_defaults(self, options: RecurrenceOptions) -> RecurrenceOptions:
        defaults = self.settings.defaults
        if defaults is not None:
            update = {
                name: getattr(defaults, name)
                for name in defaults.model_fields_set
                if name not in options.model_fields_set or getattr(options, name) is None
            }
            if update:
                options = options.model_copy(update=update)
        if options.freq is None:
            options = options.model_copy(update={"freq": Frequency.DAILY})
        return options


def parse_recurrence(
    text: str,
    *,
    anchor: datetime | date | None = None,
    settings: ParserSettings | None = None,
    cache: ResultCache[ParseResult] | None = None,
) -> ParseResult:
    """Parse one phrase with a throwaway :class:`RecurrenceParser`.

    Pass a shared *cache* to reuse results across calls.
    """
    return RecurrenceParser(settings, cache=cache).parse(text, anchor=anchor)
