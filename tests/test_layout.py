"""Tests for node layout."""

import random

import pytest

from sankeyplot.model.dataset import Dataset
from sankeyplot.model.layout import (
    BasisMode, LayoutSettings, NodeRole, compute_layout, node_height, normalization_basis,
)


class TestNormalizationBasis:
    def test_max_value(self):
        assert normalization_basis([500.0, 300.0, 200.0]) == 500.0

    def test_empty_defaults_to_one(self):
        assert normalization_basis([]) == 1.0

    def test_all_zero_defaults_to_one(self):
        assert normalization_basis([0.0, 0.0]) == 1.0

    def test_total_mode(self):
        assert normalization_basis([500.0, 300.0, 200.0], BasisMode.TOTAL) == 1000.0
        assert normalization_basis([], BasisMode.TOTAL) == 1.0


class TestNodeHeight:
    def test_basis_maps_to_max_height(self):
        assert node_height(500.0, 500.0) == 50.0

    def test_custom_max_height(self):
        assert node_height(5.0, 10.0, max_height=100.0) == 50.0

    def test_monotonic_in_value(self):
        rng = random.Random(1234)
        values = sorted(rng.uniform(0, 1000) for _ in range(200))
        heights = [node_height(v, 1000.0) for v in values]
        assert all(a <= b for a, b in zip(heights, heights[1:]))


class TestComputeLayout:
    def test_budget_example(self, budget_dataset):
        layout = compute_layout(budget_dataset)

        assert layout.total == 1000.0
        assert layout.basis == 500.0
        # Heights are relative to the largest single value (Rent)
        assert layout.source.height == pytest.approx(100.0)
        assert [t.height for t in layout.targets] == pytest.approx([50.0, 30.0, 20.0])

    def test_budget_example_with_total_as_basis(self, budget_dataset):
        layout = compute_layout(budget_dataset, LayoutSettings(basis_mode=BasisMode.TOTAL))
        assert layout.basis == 1000.0
        assert layout.source.height == pytest.approx(50.0)
        assert [t.height for t in layout.targets] == pytest.approx([25.0, 15.0, 10.0])
        assert sum(t.height for t in layout.targets) == layout.source.height

    def test_targets_keep_dataset_order(self, budget_dataset):
        layout = compute_layout(budget_dataset)
        assert [t.label for t in layout.targets] == ["Rent", "Food", "Savings"]
        assert all(t.role == NodeRole.TARGET for t in layout.targets)
        assert layout.source.role == NodeRole.SOURCE
        assert layout.source.label == "Income"

    def test_targets_stacked_without_overlap(self, budget_dataset):
        layout = compute_layout(budget_dataset)
        ys = [t.y for t in layout.targets]
        assert ys == sorted(ys)
        assert len(set(ys)) == len(ys)
        for upper, lower in zip(layout.targets, layout.targets[1:]):
            assert upper.bottom + 20.0 == pytest.approx(lower.y)

    def test_first_target_position(self, budget_dataset):
        layout = compute_layout(budget_dataset)
        first = layout.targets[0]
        assert first.x == 500.0
        assert first.width == 30.0
        assert first.y == 100.0 - (3 * 20.0) / 2

    def test_source_anchor(self, budget_dataset):
        source = compute_layout(budget_dataset).source
        assert (source.x, source.y, source.width) == (100.0, 100.0, 50.0)
        assert source.value == 1000.0

    def test_empty_dataset(self):
        layout = compute_layout(Dataset("Budget", "Income"))
        assert layout.targets == ()
        assert layout.basis == 1.0
        assert layout.source.height == 0

    def test_all_zero_values(self):
        layout = compute_layout(Dataset.from_pairs("T", "S", [("a", 0), ("b", 0)]))
        assert [t.height for t in layout.targets] == [0.0, 0.0]
        assert layout.source.height == 0.0

    def test_custom_settings(self, budget_dataset):
        settings = LayoutSettings(max_node_height=100.0, target_x=300.0, node_gap=5.0)
        layout = compute_layout(budget_dataset, settings)
        assert layout.targets[0].height == 100.0
        assert layout.targets[0].x == 300.0
        assert layout.targets[1].y == pytest.approx(layout.targets[0].bottom + 5.0)

    @pytest.mark.parametrize("seed", range(10))
    def test_target_heights_sum_to_source_height(self, seed):
        rng = random.Random(seed)
        pairs = [(f"n{i}", rng.uniform(0.01, 10_000)) for i in range(rng.randint(1, 40))]
        layout = compute_layout(Dataset.from_pairs("T", "S", pairs))
        assert sum(t.height for t in layout.targets) == layout.source.height

    def test_negative_values_are_laid_out_unchanged(self):
        layout = compute_layout(Dataset.from_pairs("T", "S", [("gain", 100), ("loss", -50)]))
        assert [t.height for t in layout.targets] == [50.0, -25.0]
        assert layout.source.height == 25.0
