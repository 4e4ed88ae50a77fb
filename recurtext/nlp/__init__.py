"""NLP utilities: fuzzy matching, normalization, splitting, date resolution."""

from recurtext.nlp.dates import DateparserResolver, DateResolver, parse_numeric_date
from recurtext.nlp.document import PhraseDocument, TextDocument
from recurtext.nlp.fuzzy import find_best_match, similar, similarity
from recurtext.nlp.normalizer import NormalizeOptions, correct_misspellings, normalize
from recurtext.nlp.splitter import ProtectedPhrase, SplitResult, protect_phrases, split

__all__ = [
    "DateResolver",
    "DateparserResolver",
    "NormalizeOptions",
    "PhraseDocument",
    "ProtectedPhrase",
    "SplitResult",
    "TextDocument",
    "correct_misspellings",
    "find_best_match",
    "normalize",
    "parse_numeric_date",
    "protect_phrases",
    "similar",
    "similarity",
    "split",
]
