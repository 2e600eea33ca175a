import pytest

from ci_notifier.rendering.compose import BlockComposer
from ci_notifier.schemas.blocks import Context, Divider, Header, RichList, Section
from ci_notifier.schemas.results import DeployOutcome, RunSummary

RUN_URL = "https://github.com/org/repo/actions/runs/42"
THREAD_NOTE = "_See :thread: for more details._"


def _context_texts(blocks):
    return [b.elements[0].text for b in blocks if isinstance(b, Context)]


def _item_texts(rich_list):
    return [item.elements[0].text for item in rich_list.items]


def test_passing_run_scenario():
    """
    WHY: A clean run should produce a compact summary with nothing threaded.
    HOW: Compose 5 passed / 0 failed / 1 skipped for platform "ios" without a run URL.
    EXPECTED: Header, divider and the counts line only; no thread note; no threaded detail.
    """
    summary = RunSummary(passed=5, failed=0, skipped=1)

    message = BlockComposer().compose_test_results(summary, "ios")

    assert [type(b) for b in message.primary] == [Header, Divider, Context]
    assert message.primary[0].text == "E2E Test Results - Ios"
    assert _context_texts(message.primary) == [
        ":white_check_mark: 5 Passing    :x: 0 Failed    :warning: 1 Skipped"
    ]
    assert message.threaded_detail is None


def test_counts_line_shows_zero_counts():
    message = BlockComposer().compose_test_results(RunSummary(passed=0, failed=0, skipped=0), "android")

    assert message.primary[0].text == "E2E Test Results - Android"
    assert _context_texts(message.primary)[0] == (
        ":white_check_mark: 0 Passing    :x: 0 Failed    :warning: 0 Skipped"
    )


def test_grouped_failures_scenario():
    """
    WHY: Failing tests are posted as a thread reply grouped by suite.
    HOW: Compose failed=2 with one suite holding two tests.
    EXPECTED: Detail is header, divider, a bold+code suite list and an indented code list; the
              primary footer points at the thread.
    """
    summary = RunSummary(passed=3, failed=2, skipped=0, grouped_failures={"suiteA": ["t1", "t2"]})

    message = BlockComposer().compose_test_results(summary, "ios")

    detail = message.threaded_detail
    assert [type(b) for b in detail] == [Header, Divider, RichList, RichList]
    assert detail[0].text == ":x: Failed tests"

    outer, inner = detail[2], detail[3]
    assert outer.indent == 0 and outer.style == "bullet"
    assert _item_texts(outer) == ["suiteA"]
    assert outer.items[0].elements[0].style.bold is True
    assert outer.items[0].elements[0].style.code is True

    assert inner.indent == 1 and inner.style == "bullet"
    assert _item_texts(inner) == ["t1", "t2"]
    assert all(i.elements[0].style.code and not i.elements[0].style.bold for i in inner.items)

    assert _context_texts(message.primary)[-1] == THREAD_NOTE


def test_no_thread_note_when_nothing_failed_even_with_groups():
    summary = RunSummary(passed=3, failed=0, skipped=0, grouped_failures={"suiteA": ["flaky"]})

    message = BlockComposer(run_url=RUN_URL).compose_test_results(summary, "ios")

    assert THREAD_NOTE not in _context_texts(message.primary)
    assert message.threaded_detail is not None


def test_thread_note_when_failed_without_groups():
    message = BlockComposer().compose_test_results(RunSummary(passed=0, failed=1, skipped=0), "ios")

    assert _context_texts(message.primary)[-1] == THREAD_NOTE
    assert message.threaded_detail is None


def test_empty_group_mapping_still_has_header_and_divider():
    summary = RunSummary(passed=1, failed=0, skipped=0, grouped_failures={})

    message = BlockComposer().compose_test_results(summary, "ios")

    assert [type(b) for b in message.threaded_detail] == [Header, Divider]


def test_group_order_follows_input_order():
    """
    WHY: Suites and tests are shown in runner order, never re-sorted.
    HOW: Compose the same failures with the key order and detail order reversed.
    EXPECTED: Output lists follow each input ordering exactly.
    """
    forward = {"b-suite": ["y", "x"], "a-suite": ["m", "n"]}
    backward = {"a-suite": ["n", "m"], "b-suite": ["x", "y"]}
    composer = BlockComposer()

    def labels_and_details(groups):
        detail = composer.compose_test_results(
            RunSummary(passed=0, failed=4, skipped=0, grouped_failures=groups), "ios"
        ).threaded_detail[2:]
        return [_item_texts(b) for b in detail]

    assert labels_and_details(forward) == [["b-suite"], ["y", "x"], ["a-suite"], ["m", "n"]]
    assert labels_and_details(backward) == [["a-suite"], ["n", "m"], ["b-suite"], ["x", "y"]]


def test_run_link_precedes_thread_note():
    message = BlockComposer(run_url=RUN_URL).compose_test_results(
        RunSummary(passed=0, failed=1, skipped=0), "ios"
    )

    assert _context_texts(message.primary)[1:] == [
        f"*Check the run execution <{RUN_URL}|HERE>.*",
        THREAD_NOTE,
    ]


def test_deploy_result_blocks():
    outcome = DeployOutcome(platform="ios", version="2.3.0", build="412")

    message = BlockComposer().compose_deploy_result(outcome)

    assert [type(b) for b in message.primary] == [Header, Divider, Section, Section]
    assert message.primary[0].text == "Deployment Results"
    assert message.primary[2].text.text == "The deployment has been completed successfully! :tada:"
    assert [f.text for f in message.primary[3].fields] == [
        "*Platform:*\niOS",
        "*Version:*\n2.3.0",
        "*Build:*\n412",
        "*Environment:*",
    ]
    assert message.threaded_detail is None


@pytest.mark.parametrize("platform, label", [
    ("ios", "iOS"),
    ("android", "Android"),
    ("IOS", "Android"),
    ("windows", "Android"),
    ("", "Android"),
])
def test_deploy_platform_label(platform, label):
    message = BlockComposer().compose_deploy_result(DeployOutcome(platform=platform))

    assert message.primary[3].fields[0].text == f"*Platform:*\n{label}"


def test_deploy_footer_never_threaded():
    message = BlockComposer(run_url=RUN_URL).compose_deploy_result(DeployOutcome(platform="android"))

    assert _context_texts(message.primary) == [f"*Check the run execution <{RUN_URL}|HERE>.*"]


def test_missing_deploy_fields_render_blank():
    message = BlockComposer().compose_deploy_result(DeployOutcome())

    assert [f.text for f in message.primary[3].fields][1:3] == ["*Version:*\n", "*Build:*\n"]
