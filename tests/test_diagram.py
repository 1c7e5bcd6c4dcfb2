"""Tests for the assembled diagram description."""

import pytest

from sankeyplot import config
from sankeyplot.model.dataset import Dataset
from sankeyplot.model.diagram import TextRole, build_diagram, format_value
from sankeyplot.model.layout import LayoutSettings


class TestFormatValue:
    @pytest.mark.parametrize("value, text", [(500, "500.0"), (420.5, "420.5"), (-20.0, "-20.0")])
    def test_float_rendering(self, value, text):
        assert format_value(value) == text

    @pytest.mark.parametrize("value, text", [
        (1e7, "1.0E7"),
        (12345678.0, "1.2345678E7"),
        (0.0001, "1.0E-4"),
        (-2.5e-5, "-2.5E-5"),
        (9999999.0, "9999999.0"),
        (0.001, "0.001"),
        (0.0, "0.0"),
    ])
    def test_scientific_outside_plain_range(self, value, text):
        assert format_value(value) == text


class TestBuildDiagram:
    def test_rects(self, budget_dataset):
        diagram = build_diagram(budget_dataset)

        assert [r.label for r in diagram.rects] == ["Income", "Rent", "Food", "Savings"]
        assert diagram.source_rect.fill_color == config.SOURCE_COLOR
        assert all(r.fill_color == config.TARGET_COLOR for r in diagram.target_rects)
        assert diagram.source_rect.node == diagram.layout.source

    def test_ribbons_follow_layout(self, budget_dataset):
        diagram = build_diagram(budget_dataset)
        assert len(list(diagram.ribbons.subpaths())) == len(diagram.target_rects)

    def test_labels(self, budget_dataset):
        diagram = build_diagram(budget_dataset)
        texts = {t.role: [] for t in diagram.texts}
        for t in diagram.texts:
            texts[t.role].append(t.text)

        assert texts[TextRole.SOURCE] == ["Income: 1000.0"]
        assert texts[TextRole.TARGET] == ["Rent: 500.0", "Food: 300.0", "Savings: 200.0"]
        assert texts[TextRole.TITLE] == ["Budget"]

    def test_label_positions(self, budget_dataset):
        diagram = build_diagram(budget_dataset)
        source = diagram.layout.source
        title = next(t for t in diagram.texts if t.role == TextRole.TITLE)
        source_label = next(t for t in diagram.texts if t.role == TextRole.SOURCE)
        rent_label = next(t for t in diagram.texts if t.text.startswith("Rent"))
        rent = diagram.layout.targets[0]

        assert (title.x, title.y) == (source.x, source.bottom + 30.0)
        assert title.font_size == config.TITLE_FONT_SIZE
        assert (source_label.x, source_label.y) == (160.0, source.y + source.height / 2)
        assert (rent_label.x, rent_label.y) == (rent.right + 10.0, rent.y + rent.height / 2)

    def test_bounds_contain_every_shape(self, budget_dataset):
        diagram = build_diagram(budget_dataset)
        b = diagram.bounds
        for rect in diagram.rects:
            n = rect.node
            assert b.left <= n.x and n.right <= b.right
            assert b.top <= n.y and n.bottom <= b.bottom
        for x, y in diagram.ribbons.points():
            assert b.left <= x <= b.right
            assert b.top <= y <= b.bottom
        for text in diagram.texts:
            assert b.left <= text.x and text.y <= b.bottom

    def test_margin(self, budget_dataset):
        tight = build_diagram(budget_dataset, LayoutSettings(margin=0.0)).bounds
        padded = build_diagram(budget_dataset, LayoutSettings(margin=15.0)).bounds
        assert padded.left == tight.left - 15.0
        assert padded.bottom == tight.bottom + 15.0

    def test_empty_dataset(self):
        diagram = build_diagram(Dataset("Budget", "Income"))
        assert diagram.target_rects == ()
        assert diagram.source_rect.node.height == 0
        assert diagram.ribbons.commands == ()
        assert diagram.bounds is not None
        assert [t.role for t in diagram.texts] == [TextRole.SOURCE, TextRole.TITLE]

    def test_rebuild_is_deterministic(self, budget_dataset):
        assert build_diagram(budget_dataset) == build_diagram(budget_dataset)
