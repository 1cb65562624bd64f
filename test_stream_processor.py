"""Tests for loading recordings and replaying them through the detector."""

import numpy as np
import polars as pl
import pytest

from pedometer import (
    AccelDataLoader,
    AccelStreamProcessor,
    StepDetector,
    count_steps,
)


FS = 100  # Hz
GRAVITY = 9.8


def walking_frame(duration=6.0, spike_every=0.5, warm_up=1.0):
    """Synthetic recording: still for ``warm_up`` seconds, then periodic spikes."""
    n = int(duration * FS)
    time_s = np.arange(n) / FS + 1.0
    z = np.full(n, GRAVITY)
    spike_idx = np.arange(int(warm_up * FS), n, int(spike_every * FS))
    z[spike_idx] += 6.0
    df = pl.DataFrame({
        'Time': time_s,
        'Accel X': np.zeros(n),
        'Accel Y': np.zeros(n),
        'Accel Z': z,
    })
    return df, spike_idx


def test_normalize_recording_layout():
    df, _ = walking_frame(duration=1.0)
    normalized = AccelDataLoader().normalize_frame(df)

    assert normalized.columns == ['timestamp_ns', 'x', 'y', 'z']
    assert normalized['timestamp_ns'].dtype == pl.Int64
    assert normalized['timestamp_ns'][0] == 1_000_000_000
    assert normalized['timestamp_ns'][1] == 1_010_000_000


def test_normalize_canonical_layout_is_cast():
    df = pl.DataFrame({'timestamp_ns': [1, 2], 'x': [0, 0], 'y': [0, 0], 'z': [9, 10]})
    normalized = AccelDataLoader().normalize_frame(df)

    assert normalized['z'].dtype == pl.Float64
    assert normalized['timestamp_ns'].to_list() == [1, 2]


def test_normalize_missing_columns():
    df = pl.DataFrame({'Time': [0.0], 'Accel X': [0.0]})
    with pytest.raises(ValueError, match="Missing required columns"):
        AccelDataLoader().normalize_frame(df)


def test_load_parquet_and_csv(tmp_path):
    df, _ = walking_frame(duration=1.0)
    df.write_parquet(tmp_path / "walk_a.parquet")
    df.write_csv(tmp_path / "walk_b.csv")
    (tmp_path / "notes.txt").write_text("not a recording")

    loader = AccelDataLoader(tmp_path)
    assert loader.get_available_recordings() == ['walk_a', 'walk_b']

    for name in ('walk_a', 'walk_b'):
        loaded = loader.load_recording(name)
        assert len(loaded) == len(df)
        assert loaded['z'].to_list() == pytest.approx(df['Accel Z'].to_list())


def test_missing_data_dir_has_no_recordings(tmp_path):
    loader = AccelDataLoader(tmp_path / "not_there")
    assert loader.get_available_recordings() == []


def test_load_missing_recording(tmp_path):
    with pytest.raises(FileNotFoundError):
        AccelDataLoader(tmp_path).load_recording("missing")


def test_replay_matches_direct_feeding():
    df, spike_idx = walking_frame()
    frame = AccelDataLoader().normalize_frame(df)

    detector = StepDetector()
    direct = [
        t for t, x, y, z in frame.iter_rows()
        if detector.update_accel(t, x, y, z)
    ]

    replayed = count_steps(frame)
    assert replayed == direct
    assert replayed == frame['timestamp_ns'].gather(spike_idx.tolist()).to_list()


def test_processor_counts_across_frames_and_resets():
    df, spike_idx = walking_frame()
    frame = AccelDataLoader().normalize_frame(df)
    half = len(frame) // 2

    processor = AccelStreamProcessor()
    first = processor.process_frame(frame[:half])
    second = processor.process_frame(frame[half:])

    assert len(first) + len(second) == len(spike_idx)
    assert processor.counter.num_steps == len(spike_idx)
    assert processor.samples_processed == len(frame)

    metrics = processor.get_metrics()
    assert metrics['cadence'] == pytest.approx(120.0)

    processor.reset()
    assert processor.counter.num_steps == 0
    assert processor.detector.velocity_estimate == 0.0
