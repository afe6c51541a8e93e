"""Tests for the synthetic workload generator."""
from __future__ import annotations

from sjf_dispatch.workloads.synthetic import WorkloadConfig, generate_synthetic


def test_correct_number_of_tasks():
    cfg = WorkloadConfig(n_jobs=100, seed=1)
    tasks = generate_synthetic(cfg)
    assert len(tasks) == 100


def test_task_ids_unique():
    cfg = WorkloadConfig(n_jobs=200, seed=2)
    tasks = generate_synthetic(cfg)
    ids = [t.id for t in tasks]
    assert sorted(ids) == list(range(200))


def test_arrivals_non_decreasing_by_id():
    cfg = WorkloadConfig(n_jobs=200, seed=3)
    by_id = sorted(generate_synthetic(cfg), key=lambda t: t.id)
    for i in range(1, len(by_id)):
        assert by_id[i].queued_at >= by_id[i - 1].queued_at


def test_input_order_is_shuffled():
    cfg = WorkloadConfig(n_jobs=200, seed=3)
    ids = [t.id for t in generate_synthetic(cfg)]
    assert ids != sorted(ids)


def test_times_are_non_negative_ints():
    cfg = WorkloadConfig(n_jobs=300, seed=4)
    for t in generate_synthetic(cfg):
        assert isinstance(t.queued_at, int) and t.queued_at >= 0
        assert isinstance(t.execution_duration, int) and t.execution_duration >= 1


def test_zero_duration_fraction():
    cfg = WorkloadConfig(n_jobs=500, seed=5, zero_duration_frac=0.5)
    zeros = [t for t in generate_synthetic(cfg) if t.execution_duration == 0]
    assert 0 < len(zeros) < 500


def test_reproducible_with_same_seed():
    cfg = WorkloadConfig(n_jobs=50, seed=99)
    assert generate_synthetic(cfg) == generate_synthetic(cfg)


def test_different_seeds_produce_different_tasks():
    tasks_a = generate_synthetic(WorkloadConfig(n_jobs=50, seed=1))
    tasks_b = generate_synthetic(WorkloadConfig(n_jobs=50, seed=2))
    # Very unlikely to be identical
    assert tasks_a != tasks_b
