# terusrag/domain/services/bm25.py
# Pure domain service: no I/O, deterministic, no external libraries.
"""BM25 lexical index.

score(Q, D) = sum over distinct qi in Q:
    IDF(qi) * (f(qi, D) * (k1 + 1)) / (f(qi, D) + k1 * (1 - b + b * |D| / avgdl))

IDF(qi) = ln((N - n(qi) + 0.5) / (n(qi) + 0.5) + 1)

The ``+ 1`` inside the logarithm keeps IDF positive even for terms present in
every document. Fused ranking weights assume this variant.

Tokens follow PHP ``str_word_count``: letters plus ``'`` and ``-``, so trailing
marks stay part of the word (``students'``, ``self-``). Unlike it, a token must
start with a letter everywhere in the text, and runs of marks without letters
(a lone ``-``) are not tokens.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Hashable, Mapping

DEFAULT_K1 = 1.2
DEFAULT_B = 0.75

# A letter, then letters, apostrophes or hyphens. Digits and other punctuation
# separate words. Case is preserved.
_WORD_RE = re.compile(r"[^\W\d_](?:[^\W\d_]|['-])*")


def tokenize(text: str) -> list[str]:
    """Split text into words. No lowercasing, no stemming."""
    return _WORD_RE.findall(text)


class BM25Index:
    """Term statistics over one corpus snapshot.

    Built once per ranking call and discarded afterwards; it is never updated in
    place, so a changed corpus needs a new index.
    """

    def __init__(
        self,
        documents: Mapping[Hashable, str],
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
    ) -> None:
        """Index documents.

        Args:
            documents: Mapping of document id to raw text
            k1: Term frequency saturation parameter
            b: Document length normalization parameter
        """
        self.k1 = k1
        self.b = b
        self.corpus_size = len(documents)
        self.doc_lengths: dict[Hashable, int] = {}
        self.doc_frequencies: dict[str, dict[Hashable, int]] = {}

        total_length = 0
        for doc_id, text in documents.items():
            tokens = tokenize(text)
            self.doc_lengths[doc_id] = len(tokens)
            total_length += len(tokens)
            for token, count in Counter(tokens).items():
                self.doc_frequencies.setdefault(token, {})[doc_id] = count

        self.avg_doc_length = total_length / self.corpus_size if self.corpus_size else 0.0

    def idf(self, token: str) -> float:
        n = len(self.doc_frequencies.get(token, {}))
        return math.log((self.corpus_size - n + 0.5) / (n + 0.5) + 1)

    def score(self, query: str, document_text: str, document_id: Hashable) -> float:
        """Score one indexed document against a query.

        ``document_text`` is accepted for call-site symmetry; statistics come from
        the index, so ``document_id`` must be one of the indexed ids.

        Raises:
            KeyError: If ``document_id`` was not indexed
        """
        doc_length = self.doc_lengths[document_id]
        score = 0.0
        for token in dict.fromkeys(tokenize(query)):
            freq = self.doc_frequencies.get(token, {}).get(document_id, 0)
            if freq == 0:
                # Contributes exactly zero whatever the idf.
                continue
            norm = 1 - self.b + self.b * (doc_length / self.avg_doc_length)
            score += self.idf(token) * (freq * (self.k1 + 1)) / (freq + self.k1 * norm)
        return score
