from gatherly.content.gatherers import Candidate
from gatherly.content.gatherers import ReadingTime
from gatherly.content.gatherers import group_by_with_limit
from gatherly.content.gatherers import hashtags
from gatherly.content.gatherers import keywords
from gatherly.content.gatherers import monthly_archive
from gatherly.content.gatherers import popular_authors
from gatherly.content.gatherers import reading_time
from gatherly.content.gatherers import related_items
from gatherly.content.gatherers import tag_counts
from gatherly.content.models import BlogPost
from gatherly.content.models import ContentItem

__all__ = [
  "BlogPost",
  "Candidate",
  "ContentItem",
  "ReadingTime",
  "group_by_with_limit",
  "hashtags",
  "keywords",
  "monthly_archive",
  "popular_authors",
  "reading_time",
  "related_items",
  "tag_counts",
]
