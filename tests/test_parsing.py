"""Tests for the agent response parser."""

from crew_coach.parsing import HeadingVocabulary, parse_agent_response, strip_bullet


class TestRecommendations:
    def test_plain_heading_with_three_bullets(self):
        text = "Recommendations:\n- Go to bed at 22:30\n- Dim lights after 21:00\n- No coffee after 14:00"
        sections = parse_agent_response(text)
        assert sections.recommendations == [
            "Go to bed at 22:30",
            "Dim lights after 21:00",
            "No coffee after 14:00",
        ]

    def test_no_heading_gives_empty_lists(self):
        sections = parse_agent_response("Just sleep more, honestly.")
        assert sections.recommendations == []
        assert sections.insights == []
        assert sections.next_steps == []
        assert sections.action_items == []

    def test_empty_text(self):
        sections = parse_agent_response("")
        assert sections.recommendations == []

    def test_mixed_bullet_styles(self):
        text = "**Recommendations**:\n- one\n• two\n* three\n  -   four  "
        sections = parse_agent_response(text)
        assert sections.recommendations == ["one", "two", "three", "four"]

    def test_window_caps_at_five_lines(self):
        bullets = "\n".join(f"- item {i}" for i in range(1, 8))
        sections = parse_agent_response(f"**Recommendations**:\n{bullets}")
        assert sections.recommendations == [f"item {i}" for i in range(1, 6)]

    def test_stops_at_next_heading(self):
        text = "**Recommendations**:\n- a\n- b\n**Insights**:\n- c"
        sections = parse_agent_response(text)
        assert sections.recommendations == ["a", "b"]
        assert sections.insights == ["c"]

    def test_prose_after_heading_gives_empty_list(self):
        text = "**Recommendations**:\nHere is what I suggest overall.\n- later bullet"
        assert parse_agent_response(text).recommendations == []

    def test_blank_lines_between_bullets_are_ignored(self):
        text = "**Recommendations**:\n\n- a\n\n- b\n"
        assert parse_agent_response(text).recommendations == ["a", "b"]

    def test_later_empty_heading_does_not_erase_earlier_items(self):
        text = "**Recommendations**:\n- a\n- b\nSee the **Recommendations** above."
        assert parse_agent_response(text).recommendations == ["a", "b"]


class TestSections:
    def test_full_structured_answer(self):
        text = (
            "**Analysis**: You sleep about 6.5 hours.\n"
            "**Recommendations**:\n- Fixed wake time\n- Cooler room\n"
            "**Insights**:\n- Weekend drift of 90 minutes\n"
            "**Next Steps**:\n- Set an alarm for 06:30\n- Buy blackout curtains\n"
        )
        sections = parse_agent_response(text)
        assert sections.recommendations == ["Fixed wake time", "Cooler room"]
        assert sections.insights == ["Weekend drift of 90 minutes"]
        assert sections.next_steps == ["Set an alarm for 06:30", "Buy blackout curtains"]

    def test_action_items_default_to_first_three_recommendations(self):
        text = "**Recommendations**:\n- a\n- b\n- c\n- d"
        sections = parse_agent_response(text)
        assert sections.action_items == ["a", "b", "c"]

    def test_action_heading_fills_action_items_and_next_steps(self):
        text = "**Recommendations**:\n- a\n- b\n**Action Items**:\n- x\n- y"
        sections = parse_agent_response(text)
        assert sections.action_items == ["x", "y"]
        assert sections.next_steps == ["x", "y"]
        assert sections.recommendations == ["a", "b"]

    def test_recommendations_never_filled_from_action_items(self):
        text = "**Action Items**:\n- x\n- y"
        sections = parse_agent_response(text)
        assert sections.recommendations == []
        assert sections.action_items == ["x", "y"]

    def test_heading_match_is_case_sensitive(self):
        text = "recommendations:\n- a"
        assert parse_agent_response(text).recommendations == []

    def test_custom_vocabulary(self):
        vocab = HeadingVocabulary(recommendations=("## Tips",))
        text = "## Tips\n- hydrate\n- stretch"
        assert parse_agent_response(text, vocab).recommendations == ["hydrate", "stretch"]


class TestStripBullet:
    def test_bold_heading_is_not_a_bullet(self):
        assert strip_bullet("**Insights**:") is None

    def test_plain_text_is_not_a_bullet(self):
        assert strip_bullet("hello") is None

    def test_markers_are_stripped(self):
        assert strip_bullet("  •  walk  ") == "walk"
