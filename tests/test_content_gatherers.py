"""Tests for the content gatherer catalog."""

from datetime import datetime

import pytest

from gatherly import GathererConfigurationError
from gatherly import Pipeline
from gatherly import SequentialStrategy
from gatherly import ThreadedStrategy
from gatherly.content import ReadingTime
from gatherly.content import group_by_with_limit
from gatherly.content import hashtags
from gatherly.content import keywords
from gatherly.content import monthly_archive
from gatherly.content import popular_authors
from gatherly.content import reading_time
from gatherly.content import related_items
from gatherly.content import tag_counts


def run(gatherer, data):
  return list(SequentialStrategy().execute(gatherer, data))


def partitioned(gatherer, data, partition_size):
  return list(ThreadedStrategy(max_workers=3, partition_size=partition_size).execute(gatherer, data))


class TestGroupByWithLimit:
  """Test grouping with a per-group limit."""

  def test_most_recent_per_category(self, make_post):
    """Test the newest post per category, categories in first-seen order."""
    java_new = make_post(category="Java", published_date=datetime(2025, 3, 10))
    java_old = make_post(category="Java", published_date=datetime(2025, 3, 5))
    spring = make_post(category="Spring", published_date=datetime(2025, 3, 8))

    gatherer = group_by_with_limit(
      lambda post: post.category, limit=1, sort_key=lambda post: post.published_date, reverse=True
    )

    assert run(gatherer, [java_new, java_old, spring]) == [("Java", [java_new]), ("Spring", [spring])]

  def test_late_element_can_outrank_early_ones(self, make_post):
    """Test nothing is truncated before the input ends."""
    posts = [make_post(category="Java", published_date=datetime(2025, 3, day)) for day in (1, 2, 3, 20)]
    gatherer = group_by_with_limit(lambda post: post.category, 2, lambda post: post.published_date, reverse=True)

    [(category, recent)] = run(gatherer, posts)
    assert category == "Java"
    assert recent == [posts[3], posts[2]]

  def test_ties_keep_encounter_order(self, make_post):
    same_day = datetime(2025, 3, 3)
    posts = [make_post(title=title, category="Java", published_date=same_day) for title in "abc"]
    gatherer = group_by_with_limit(lambda post: post.category, 3, lambda post: post.published_date, reverse=True)

    assert run(gatherer, posts) == [("Java", posts)]

  def test_without_sort_key_keeps_encounter_order(self):
    assert run(group_by_with_limit(len, 2), ["aa", "b", "cc", "dd", "e"]) == [(2, ["aa", "cc"]), (1, ["b", "e"])]

  @pytest.mark.parametrize("limit", [0, 1, 2, 5])
  def test_limit_and_sorting_hold_for_every_group(self, posts, limit):
    gatherer = group_by_with_limit(lambda post: post.category, limit, lambda post: post.published_date)

    for _category, group in run(gatherer, posts):
      assert len(group) <= limit
      dates = [post.published_date for post in group]
      assert dates == sorted(dates)

  @pytest.mark.parametrize("partition_size", [1, 2, 5])
  def test_partitioned_matches_sequential(self, posts, partition_size):
    gatherer = group_by_with_limit(lambda post: post.category, 2, lambda post: post.published_date, reverse=True)
    assert partitioned(gatherer, posts, partition_size) == run(gatherer, posts)

  def test_negative_limit_is_rejected_eagerly(self):
    with pytest.raises(GathererConfigurationError):
      group_by_with_limit(len, -1)

  def test_key_error_propagates(self):
    def broken_key(item):
      raise LookupError("no key")

    with pytest.raises(LookupError):
      run(group_by_with_limit(broken_key, 1), [1])


class TestRelatedItems:
  """Test similarity ranking."""

  @pytest.fixture
  def catalog(self, make_post):
    target = make_post(id=1, title="Stream Gatherers Tutorial", content="Learn gatherers", category="Java")
    same_category = make_post(id=2, title="Records Guide", content="Clean code", category="Java")
    shared_tokens = make_post(id=3, title="Stream processing", content="Gatherers everywhere", category="Spring")
    both = make_post(id=4, title="Stream tricks", content="more", category="Java")
    unrelated = make_post(id=5, title="Docker", content="Images", category="DevOps")
    return target, same_category, shared_tokens, both, unrelated

  def test_ranking(self, catalog):
    """Test category and shared tokens score, ties by encounter order, target excluded."""
    target, same_category, shared_tokens, both, _unrelated = catalog
    assert run(related_items(target, limit=3), catalog) == [[both, same_category, shared_tokens]]

  def test_limit(self, catalog):
    target, same_category, _shared, both, _unrelated = catalog
    assert run(related_items(target, limit=2), catalog) == [[both, same_category]]

  def test_weights_are_configurable(self, catalog):
    target, same_category, shared_tokens, both, _unrelated = catalog
    gatherer = related_items(target, limit=3, category_weight=0.5, token_weight=1.0)
    assert run(gatherer, catalog) == [[shared_tokens, both, same_category]]

  def test_empty_input(self, catalog):
    assert run(related_items(catalog[0], limit=3), []) == [[]]

  @pytest.mark.parametrize("partition_size", [1, 2])
  def test_partitioned_matches_sequential(self, catalog, partition_size):
    gatherer = related_items(catalog[0], limit=3)
    assert partitioned(gatherer, catalog, partition_size) == run(gatherer, catalog)

  def test_pipeline_single_output(self, posts):
    target = posts[0]
    related = Pipeline(posts).gather(related_items(target, limit=3)).single(default=[])
    assert target not in related
    assert all(post.category == "Java" for post in related)
    assert [post.id for post in related] == [37, 36, 2]

  def test_keywords(self, make_post):
    post = make_post(title="Stream API", content="Use #streams for data")
    assert keywords(post) == {"stream", "streams", "data"}

  def test_hashtags(self, make_post):
    post = make_post(title="#ignored", content="Use #Streams and #java_24")
    assert hashtags(post) == {"streams", "java"}

  def test_rank_by_shared_hashtags(self, make_post):
    target = make_post(id=1, title="Gatherers", content="#java #streams", category="Java")
    tagged = make_post(id=2, title="Other", content="all about #Streams", category="Spring")
    untagged = make_post(id=3, title="Gatherers", content="streams without tags", category="Spring")
    other_tag = make_post(id=4, title="Go", content="#golang", category="Spring")

    gatherer = related_items(target, limit=3, tokenizer=hashtags)

    assert run(gatherer, [target, tagged, untagged, other_tag]) == [[tagged]]


class TestTagCounts:
  """Test hashtag extraction."""

  def test_counts_tags(self, make_post):
    post = make_post(content="love #streams and #streams again #java")
    [counts] = run(tag_counts(), [post])
    assert counts == {"streams": 2, "java": 1}
    assert list(counts) == ["streams", "java"]

  def test_case_sensitivity(self, make_post):
    post = make_post(content="#Java and #java")
    assert run(tag_counts(), [post]) == [{"Java": 1, "java": 1}]
    assert run(tag_counts(case_sensitive=False), [post]) == [{"java": 2}]

  def test_tag_ends_at_non_alphanumeric(self, make_post):
    post = make_post(content="#spring_boot #jdk24! # #")
    assert run(tag_counts(), [post]) == [{"spring": 1, "jdk24": 1}]

  def test_custom_text(self, make_post):
    post = make_post(title="Why #python", content="#ignored")
    assert run(tag_counts(text=lambda item: item.title), [post]) == [{"python": 1}]

  @pytest.mark.parametrize("partition_size", [1, 3])
  def test_partitioned_matches_sequential(self, posts, partition_size):
    assert partitioned(tag_counts(), posts, partition_size) == run(tag_counts(), posts)


class TestReadingTime:
  """Test per-item reading time."""

  def test_rounds_up(self, make_post):
    short = make_post(content="word " * 150)
    long = make_post(content="word " * 401)
    assert run(reading_time(), [short, long]) == [ReadingTime(short, 1), ReadingTime(long, 3)]

  def test_custom_speed(self, make_post):
    post = make_post(content="one two three four five")
    [estimate] = run(reading_time(words_per_minute=2), [post])
    assert estimate.minutes == 3
    assert estimate.item is post

  def test_empty_content(self, make_post):
    assert run(reading_time(), [make_post(content="")])[0].minutes == 0

  def test_emits_immediately(self, make_post):
    results = SequentialStrategy().execute(reading_time(), iter([make_post(content="a b"), None]))
    assert next(results).minutes == 1

  def test_partitioned_keeps_order(self, posts):
    assert partitioned(reading_time(10), posts, 2) == run(reading_time(10), posts)

  @pytest.mark.parametrize("speed", [0, -100])
  def test_non_positive_speed_is_rejected_eagerly(self, speed):
    with pytest.raises(GathererConfigurationError):
      reading_time(speed)


class TestPopularAuthors:
  """Test author ranking."""

  def test_top_author(self, make_post):
    posts = [make_post(author="A"), make_post(author="B"), make_post(author="A")]
    assert run(popular_authors(top_n=1), posts) == [[("A", 2)]]

  def test_ties_keep_first_seen_order(self, make_post):
    posts = [make_post(author=name) for name in ("C", "B", "A", "B", "C")]
    assert run(popular_authors(top_n=3), posts) == [[("C", 2), ("B", 2), ("A", 1)]]

  def test_zero_top_n(self, make_post):
    assert run(popular_authors(top_n=0), [make_post(author="A")]) == [[]]

  @pytest.mark.parametrize("partition_size", [1, 2, 4])
  def test_partitioned_matches_sequential(self, posts, partition_size):
    assert partitioned(popular_authors(5), posts, partition_size) == run(popular_authors(5), posts)

  def test_negative_top_n_is_rejected_eagerly(self):
    with pytest.raises(GathererConfigurationError):
      popular_authors(-1)


class TestMonthlyArchive:
  """Test month-bucketed archiving."""

  def test_buckets_and_ordering(self, posts):
    [archive] = run(monthly_archive(), posts)

    assert list(archive) == ["2025-03", "2025-02", "2024-12"]
    assert [post.id for post in archive["2025-02"]] == [15, 7]
    assert [post.id for post in archive["2024-12"]] == [19]
    march = [post.published_date for post in archive["2025-03"]]
    assert march == sorted(march, reverse=True)
    assert sum(len(bucket) for bucket in archive.values()) == len(posts)

  def test_empty_input(self):
    assert run(monthly_archive(), []) == [{}]

  @pytest.mark.parametrize("partition_size", [1, 3])
  def test_partitioned_matches_sequential(self, posts, partition_size):
    parallel = partitioned(monthly_archive(), posts, partition_size)
    expected = run(monthly_archive(), posts)
    assert parallel == expected
    assert list(parallel[0]) == list(expected[0])
