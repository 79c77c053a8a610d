"""Query parsing into atoms and multi-atom scoring.

Query grammar
-------------
* Atoms are separated by unescaped, unquoted whitespace.
* ``\\`` escapes the following character, which is then always literal.
* ``"..."`` keeps its contents (spaces included) literal and makes the atom a
  substring atom. An unterminated double quote is a ``QuerySyntaxError``.
* Inside an atom, operators are read in this order: a leading ``!`` negates,
  then a leading ``^`` anchors to the start or a leading ``'`` forces a
  substring match (a matching trailing ``'`` is dropped), then a trailing
  ``$`` anchors to the end. ``^foo$`` must equal the whole haystack.
* Negated atoms without an anchor are substring atoms, so ``!foo`` excludes
  every haystack containing ``foo``.
* A standalone ``|`` joins its neighbours into an OR group: atoms in a group
  are optional individually and the group is satisfied by any of them.
* Atoms left empty once their operators are removed are dropped.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .exceptions import LengthExceeded, QuerySyntaxError
from .matcher import Matcher
from .normalizer import CodepointSequence
from .result import EMPTY_MATCH, MatchResult
from .scoring import DEFAULT_CONFIG, AtomKind, ScoringConfig

OR_OPERATOR = "|"

# (character, escaped) pairs; escaped characters never act as operators
_Token = List[Tuple[str, bool]]


@dataclass(frozen=True)
class Atom:
    """One parsed query term."""

    text: str
    kind: AtomKind = AtomKind.FUZZY
    negated: bool = False
    required: bool = True
    group: int = 0

    @property
    def mode(self) -> str:
        return "negated" if self.negated else self.kind.value


@dataclass(frozen=True)
class Pattern:
    """Ordered atoms of a parsed query."""

    query: str
    atoms: Tuple[Atom, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return not self.atoms

    def groups(self) -> List[List[Atom]]:
        """Atoms grouped into OR groups, in query order."""
        grouped: Dict[int, List[Atom]] = {}
        for atom in self.atoms:
            grouped.setdefault(atom.group, []).append(atom)
        return list(grouped.values())

    @classmethod
    def parse(cls, query: str, config: Optional[ScoringConfig] = None) -> "Pattern":
        """
        Parse a raw query.

        Args:
            query: User-typed query text
            config: Supplies the needle length limit

        Returns:
            Pattern with one Atom per term

        Raises:
            QuerySyntaxError: On an unterminated double quote
            LengthExceeded: When an atom is longer than ``max_needle_length``
        """
        config = config or DEFAULT_CONFIG
        parsed: List[List[Atom]] = []
        join_next = False

        for chars, quoted in _tokenize(query):
            if not quoted and chars == [(OR_OPERATOR, False)]:
                join_next = bool(parsed)
                continue
            atom = _parse_atom(chars, quoted)
            if atom is None:
                continue
            if len(atom.text) > config.max_needle_length:
                raise LengthExceeded("needle", len(atom.text), config.max_needle_length)
            if join_next:
                parsed[-1].append(atom)
            else:
                parsed.append([atom])
            join_next = False

        atoms = []
        for group_id, members in enumerate(parsed):
            required = len(members) == 1
            for atom in members:
                atoms.append(
                    Atom(atom.text, atom.kind, atom.negated, required=required, group=group_id)
                )
        return cls(query=query, atoms=tuple(atoms))


def _tokenize(query: str) -> List[Tuple[_Token, bool]]:
    tokens: List[Tuple[_Token, bool]] = []
    current: _Token = []
    quoted = False
    in_quotes = False
    escaped = False

    for ch in query:
        if escaped:
            current.append((ch, True))
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            in_quotes = not in_quotes
            quoted = True
        elif in_quotes:
            current.append((ch, True))
        elif ch.isspace():
            if current or quoted:
                tokens.append((current, quoted))
            current, quoted = [], False
        else:
            current.append((ch, False))

    if in_quotes:
        raise QuerySyntaxError(f"Unterminated quote in query: {query!r}")
    if escaped:
        # A trailing backslash stands for itself
        current.append(("\\", True))
    if current or quoted:
        tokens.append((current, quoted))
    return tokens


def _is_operator(chars: _Token, index: int, op: str) -> bool:
    ch, escaped = chars[index]
    return ch == op and not escaped


def _parse_atom(chars: _Token, quoted: bool) -> Optional[Atom]:
    negated = False
    kind = AtomKind.SUBSTRING if quoted else AtomKind.FUZZY

    if chars and _is_operator(chars, 0, "!"):
        negated = True
        chars = chars[1:]

    if chars and _is_operator(chars, 0, "^"):
        kind = AtomKind.PREFIX
        chars = chars[1:]
    elif chars and _is_operator(chars, 0, "'"):
        kind = AtomKind.SUBSTRING
        chars = chars[1:]
        if chars and _is_operator(chars, -1, "'"):
            chars = chars[:-1]

    if chars and _is_operator(chars, -1, "$"):
        kind = AtomKind.EQUAL if kind is AtomKind.PREFIX else AtomKind.SUFFIX
        chars = chars[:-1]

    if negated and kind is AtomKind.FUZZY:
        kind = AtomKind.SUBSTRING

    text = "".join(ch for ch, _ in chars)
    if not text:
        return None
    return Atom(text=text, kind=kind, negated=negated)


class PatternComposer:
    """Evaluates a parsed pattern against haystacks."""

    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher
        self.config = matcher.config
        self._needles: Dict[str, Tuple[str, bool]] = {}

    def _needle(self, atom: Atom) -> Tuple[str, bool]:
        prepared = self._needles.get(atom.text)
        if prepared is None:
            prepared = self._needles[atom.text] = self.matcher.prepare_needle(atom.text)
        return prepared

    def evaluate(self, pattern: Pattern, haystack: str) -> Optional[MatchResult]:
        """
        Score ``haystack`` against every atom of ``pattern``.

        A haystack matches when each group is satisfied: a plain atom must
        match, a negated atom must not. The combined score is the sum of the
        group scores plus ``bonus_atom_order`` for every adjacent pair of
        positive groups whose matches appear in query order.

        Returns:
            MatchResult with sorted, de-duplicated positions in ``haystack``
            coordinates, or None
        """
        if pattern.is_empty:
            return EMPTY_MATCH

        sequences: Dict[bool, CodepointSequence] = {}
        total = 0
        spans: List[Tuple[int, int]] = []
        positions = set()

        for group in pattern.groups():
            best: Optional[MatchResult] = None
            for atom in group:
                needle, fold_case = self._needle(atom)
                sequence = sequences.get(fold_case)
                if sequence is None:
                    sequence = sequences[fold_case] = self.matcher.prepare_haystack(
                        haystack, fold_case
                    )
                result = self.matcher.match_prepared(sequence, needle, atom.kind)
                if atom.negated:
                    result = EMPTY_MATCH if result is None else None
                if result is not None and (best is None or result.score > best.score):
                    best = result
            if best is None:
                return None

            total += best.score
            if best.indices:
                spans.append((best.indices[0], best.indices[-1]))
                positions.update(best.indices)

        for (_, previous_end), (next_start, _) in zip(spans, spans[1:]):
            if next_start > previous_end:
                total += self.config.bonus_atom_order

        sequence = next(iter(sequences.values()))
        return MatchResult(total, tuple(sorted(set(sequence.to_original(sorted(positions))))))
