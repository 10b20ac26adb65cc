"""Gatherers over streams of content items (blog posts and the like).

Every aggregation here keeps its state structurally mergeable: combining
the states of two partitions unions their keys and concatenates or sums
their values before any sorting or truncation, which only happens in
`finish`. Running them through a partitioned strategy therefore gives the
same output as running them sequentially.
"""

from bisect import insort
from collections import Counter
from collections.abc import Callable
from collections.abc import Hashable
from math import ceil
import re
from typing import Any
from typing import NamedTuple

from gatherly.content.models import ContentItem
from gatherly.helpers import require_non_negative
from gatherly.helpers import require_positive
from gatherly.types import Gatherer
from gatherly.types import Sink

DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_CATEGORY_WEIGHT = 2.0
DEFAULT_TOKEN_WEIGHT = 1.0
MIN_KEYWORD_LENGTH = 4

TAG_PATTERN = re.compile(r"#([^\W_]+)")
WORD_PATTERN = re.compile(r"[^\W_]+")


class ReadingTime[T](NamedTuple):
  item: T
  minutes: int


class Candidate[T](NamedTuple):
  score: float
  item: T


def _content(item: ContentItem) -> str:
  return item.content


def keywords(item: ContentItem) -> set[str]:
  """Lowercased words of at least MIN_KEYWORD_LENGTH characters from the title and content."""
  text = f"{item.title} {item.content}".lower()
  return {word for word in WORD_PATTERN.findall(text) if len(word) >= MIN_KEYWORD_LENGTH}


def hashtags(item: ContentItem) -> set[str]:
  """The lowercased hashtag tokens of the content."""
  return {tag.lower() for tag in TAG_PATTERN.findall(item.content)}


def group_by_with_limit[T, K: Hashable](
  key: Callable[[T], K],
  limit: int,
  sort_key: Callable[[T], Any] | None = None,
  reverse: bool = False,
) -> Gatherer[T, dict[K, list[T]], tuple[K, list[T]]]:
  """Group elements by key and keep the first `limit` of each group after sorting.

  Every element is kept until the end, so a late element can still outrank
  an early one. Groups are emitted in the order their keys were first
  encountered; within a group, elements that sort equal stay in encounter
  order.

  Args:
      key: Extracts the grouping key.
      limit: Maximum number of elements per group. Must not be negative.
      sort_key: Sort key applied within each group. Encounter order if None.
      reverse: Sort descending.

  Returns:
      A gatherer emitting one `(key, elements)` pair per group.
  """
  require_non_negative("limit", limit)

  def integrate(state: dict[K, list[T]], element: T, _sink: Sink[tuple[K, list[T]]]) -> bool:
    state.setdefault(key(element), []).append(element)
    return True

  def combine(left: dict[K, list[T]], right: dict[K, list[T]]) -> dict[K, list[T]]:
    for group_key, elements in right.items():
      left.setdefault(group_key, []).extend(elements)
    return left

  def finish(state: dict[K, list[T]], sink: Sink[tuple[K, list[T]]]) -> None:
    for group_key, elements in state.items():
      if sort_key is not None:
        elements = sorted(elements, key=sort_key, reverse=reverse)
      if not sink.push((group_key, elements[:limit])):
        return

  return Gatherer.of(dict, integrate, combine, finish)


def related_items[T: ContentItem](
  target: T,
  limit: int,
  category_weight: float = DEFAULT_CATEGORY_WEIGHT,
  token_weight: float = DEFAULT_TOKEN_WEIGHT,
  tokenizer: Callable[[ContentItem], set[str]] = keywords,
) -> Gatherer[T, list[Candidate[T]], list[T]]:
  """Rank items by similarity to `target` and keep the best `limit`.

  The score is `category_weight` when the category matches plus
  `token_weight` per token shared with the target. The target itself (same
  id) and items scoring zero are never included.

  Tokens default to `keywords`, the words of four or more letters in the
  title and content, so items without hashtags still rank by shared
  vocabulary. Pass `tokenizer=hashtags` to score by shared hashtags only.

  Args:
      target: The item to find relatives of.
      limit: Maximum number of related items. Must not be negative.
      category_weight: Score for sharing the target's category.
      token_weight: Score per shared token.
      tokenizer: Extracts the tokens of an item.

  Returns:
      A gatherer with a single output: the related items, most similar first,
      ties in encounter order.
  """
  require_non_negative("limit", limit)
  target_tokens = tokenizer(target)

  def score(item: T) -> float:
    category_score = category_weight if item.category == target.category else 0.0
    return category_score + token_weight * len(target_tokens & tokenizer(item))

  def ranking(candidate: Candidate[T]) -> float:
    return -candidate.score

  def integrate(state: list[Candidate[T]], element: T, _sink: Sink[list[T]]) -> bool:
    if element.id == target.id:
      return True
    candidate = Candidate(score(element), element)
    if candidate.score > 0:
      insort(state, candidate, key=ranking)
      del state[limit:]
    return True

  def combine(left: list[Candidate[T]], right: list[Candidate[T]]) -> list[Candidate[T]]:
    return sorted(left + right, key=ranking)[:limit]

  def finish(state: list[Candidate[T]], sink: Sink[list[T]]) -> None:
    sink.push([candidate.item for candidate in state])

  return Gatherer.of(list, integrate, combine, finish)


def tag_counts[T: ContentItem](
  case_sensitive: bool = True,
  text: Callable[[T], str] = _content,
) -> Gatherer[T, Counter[str], dict[str, int]]:
  """Count hashtags across all items.

  A tag is `#` followed by a run of letters or digits; it is counted
  without the `#`.

  Args:
      case_sensitive: If False, tags are lowercased before counting.
      text: Selects the text to scan. Defaults to the item content.

  Returns:
      A gatherer with a single output mapping each tag to its count, tags in
      first-seen order.
  """

  def integrate(state: Counter[str], element: T, _sink: Sink[dict[str, int]]) -> bool:
    for tag in TAG_PATTERN.findall(text(element)):
      state[tag if case_sensitive else tag.lower()] += 1
    return True

  def combine(left: Counter[str], right: Counter[str]) -> Counter[str]:
    left.update(right)
    return left

  def finish(state: Counter[str], sink: Sink[dict[str, int]]) -> None:
    sink.push(dict(state))

  return Gatherer.of(Counter, integrate, combine, finish)


def reading_time[T: ContentItem](words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> Gatherer[T, None, ReadingTime[T]]:
  """Pair every item with its estimated reading time in whole minutes."""
  require_positive("words_per_minute", words_per_minute)

  def integrate(_state: None, element: T, sink: Sink[ReadingTime[T]]) -> bool:
    words = len(element.content.split())
    return sink.push(ReadingTime(element, ceil(words / words_per_minute)))

  def combine(left: None, _right: None) -> None:
    return left

  return Gatherer(integrate=integrate, combine=combine)


def popular_authors[T: ContentItem](top_n: int) -> Gatherer[T, Counter[str], list[tuple[str, int]]]:
  """Rank authors by number of items, most prolific first.

  Authors with the same count keep the order they were first seen in.

  Args:
      top_n: Maximum number of authors. Must not be negative.

  Returns:
      A gatherer with a single output: `(author, count)` pairs.
  """
  require_non_negative("top_n", top_n)

  def integrate(state: Counter[str], element: T, _sink: Sink[list[tuple[str, int]]]) -> bool:
    state[element.author] += 1
    return True

  def combine(left: Counter[str], right: Counter[str]) -> Counter[str]:
    left.update(right)
    return left

  def finish(state: Counter[str], sink: Sink[list[tuple[str, int]]]) -> None:
    ranked = sorted(state.items(), key=lambda entry: entry[1], reverse=True)
    sink.push(ranked[:top_n])

  return Gatherer.of(Counter, integrate, combine, finish)


def _year_month(item: ContentItem) -> str:
  return f"{item.published_date.year:04d}-{item.published_date.month:02d}"


def monthly_archive[T: ContentItem]() -> Gatherer[T, dict[str, list[T]], dict[str, list[T]]]:
  """Bucket items by publication month, newest month and newest item first.

  Returns:
      A gatherer with a single output mapping `"YYYY-MM"` to the items of
      that month. The mapping is ordered by month descending; each bucket is
      ordered by `published_date` descending.
  """

  def integrate(state: dict[str, list[T]], element: T, _sink: Sink[dict[str, list[T]]]) -> bool:
    state.setdefault(_year_month(element), []).append(element)
    return True

  def combine(left: dict[str, list[T]], right: dict[str, list[T]]) -> dict[str, list[T]]:
    for month, items in right.items():
      left.setdefault(month, []).extend(items)
    return left

  def finish(state: dict[str, list[T]], sink: Sink[dict[str, list[T]]]) -> None:
    archive = {
      month: sorted(state[month], key=lambda item: item.published_date, reverse=True)
      for month in sorted(state, reverse=True)
    }
    sink.push(archive)

  return Gatherer.of(dict, integrate, combine, finish)
