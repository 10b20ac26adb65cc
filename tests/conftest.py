from datetime import datetime
import itertools

import pytest

from gatherly.content import BlogPost


@pytest.fixture
def make_post():
  """Factory for blog posts with sensible defaults."""
  ids = itertools.count(1000)

  def factory(
    id: int | None = None,
    title: str = "Untitled",
    author: str = "Anonymous",
    content: str = "",
    category: str = "General",
    published_date: datetime = datetime(2025, 3, 1, 9, 0),
  ) -> BlogPost:
    return BlogPost(
      id=next(ids) if id is None else id,
      title=title,
      author=author,
      content=content,
      category=category,
      published_date=published_date,
    )

  return factory


@pytest.fixture
def posts() -> list[BlogPost]:
  """A small catalog spanning several categories, authors and months."""
  return [
    BlogPost(
      1,
      "Getting Started with Stream Gatherers",
      "John Doe",
      "Learn how to use the new #streams #gatherers feature to process data more efficiently.",
      "Java",
      datetime(2025, 3, 18, 10, 15),
    ),
    BlogPost(
      2,
      "Virtual Threads: Performance Analysis",
      "Jane Smith",
      "A deep dive into the performance of virtual threads compared to platform threads. #java #performance",
      "Java",
      datetime(2025, 3, 15, 14, 30),
    ),
    BlogPost(
      3,
      "Mastering Records for Clean Code",
      "Alex Johnson",
      "How to use records effectively to reduce boilerplate. #java",
      "Java",
      datetime(2025, 3, 10, 9, 45),
    ),
    BlogPost(
      6,
      "Building Reactive APIs with WebFlux",
      "Emily Chen",
      "A comprehensive guide to building scalable reactive APIs. #spring #reactive",
      "Spring",
      datetime(2025, 3, 17, 11, 5),
    ),
    BlogPost(
      7,
      "Spring Boot New Features Overview",
      "David Wilson",
      "Discover what's new in Spring Boot and how to leverage these features. #spring",
      "Spring",
      datetime(2025, 2, 12, 15, 40),
    ),
    BlogPost(
      11,
      "Event-Driven Architecture Patterns",
      "James Taylor",
      "A deep dive into event-driven architecture patterns in modern systems. #architecture",
      "Architecture",
      datetime(2025, 3, 16, 16, 50),
    ),
    BlogPost(
      15,
      "PostgreSQL Performance Tuning Guide",
      "Noah Anderson",
      "Advanced techniques for optimizing database performance. #performance #database",
      "Database",
      datetime(2025, 2, 19, 10, 30),
    ),
    BlogPost(
      19,
      "GitOps Workflow with Kubernetes",
      "Lucas Scott",
      "Implementing a GitOps approach to continuous delivery. #devops",
      "DevOps",
      datetime(2024, 12, 20, 9, 10),
    ),
    BlogPost(
      36,
      "Stream Gatherers: A Complete Tutorial",
      "John Doe",
      "This tutorial walks through all aspects of Stream Gatherers with practical examples. #streams #gatherers",
      "Java",
      datetime(2025, 3, 19, 9, 30),
    ),
    BlogPost(
      37,
      "Comparing Stream Collectors and Gatherers",
      "Jane Smith",
      "Learn how gatherers improve upon collectors with examples of both approaches. #streams",
      "Java",
      datetime(2025, 3, 16, 14, 15),
    ),
    BlogPost(
      38,
      "Spring Data Best Practices",
      "John Doe",
      "Tips for efficient database access with repositories. #spring #database",
      "Spring",
      datetime(2025, 3, 1, 9, 30),
    ),
  ]
