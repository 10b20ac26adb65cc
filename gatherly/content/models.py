from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class ContentItem(Protocol):
  """The read-only fields the content gatherers rely on."""

  @property
  def id(self) -> int: ...

  @property
  def title(self) -> str: ...

  @property
  def author(self) -> str: ...

  @property
  def content(self) -> str: ...

  @property
  def category(self) -> str: ...

  @property
  def published_date(self) -> datetime: ...


@dataclass(frozen=True, slots=True)
class BlogPost:
  """A published blog post."""

  id: int
  title: str
  author: str
  content: str
  category: str
  published_date: datetime
