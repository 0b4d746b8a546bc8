import pytest

from create_dataset import HEADER, compute_average_per_run, read_elapsed_times


def write_log(path, times):
    with open(path, "w") as file:
        for elapsed_ms in times:
            file.write(f"Timestamp: 2024-01-01 10:00:00, EXECUTION TIME ms: {elapsed_ms}, MAX ERROR: 0.0, MSE: 0.0, PSNR: inf\n")


def test_read_elapsed_times(tmp_path):
    path = tmp_path / "run_convolution_tiled.log"
    write_log(path, [1.5, 2.5])
    assert read_elapsed_times(path) == [1.5, 2.5]


def test_compute_average_per_run(tmp_path):
    results = tmp_path / "results"
    dataset = tmp_path / "dataset"
    results.mkdir()
    write_log(results / "random-64x64-f3_convolution_tiled.log", [1.0, 3.0])
    write_log(results / "random-64x64-f3_convolution_naive.log", [4.0, 6.0, 8.0])
    write_log(results / "lena-512x512-f9_convolution_tiled.log", [10.0])
    write_log(results / "empty_convolution_cpu.log", [])
    (results / "notes.txt").write_text("ignored")

    averages = compute_average_per_run(str(results), str(dataset))

    assert averages["tiled"] == {"lena-512x512-f9": 10.0, "random-64x64-f3": 2.0}
    assert averages["naive"] == {"random-64x64-f3": 6.0}
    assert averages["cpu"] == {}

    lines = (dataset / "tiled.data").read_text().splitlines(keepends=True)
    assert lines[0] == HEADER
    assert lines[1:] == ["lena-512x512-f9;10.0\n", "random-64x64-f3;2.0\n"]
    assert (dataset / "constant.data").read_text() == HEADER


def test_dataset_is_readable_by_the_charts(tmp_path):
    pytest.importorskip("seaborn")
    from plot_charts import load_dataset

    results = tmp_path / "results"
    results.mkdir()
    write_log(results / "random-64x64-f3_convolution_tiled.log", [2.0])
    write_log(results / "random-64x64-f3_convolution_naive.log", [8.0])
    compute_average_per_run(str(results), str(tmp_path / "dataset"))

    df = load_dataset(str(tmp_path / "dataset"))

    assert sorted(df["Hardware"]) == ["GPU NAIVE", "GPU TILED"]
    assert df.set_index("Hardware").loc["GPU TILED", "Time (ms)"] == pytest.approx(2.0)


def test_box_plot_collects_repetitions(tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import box_plot

    write_log(tmp_path / "random-64x64-f3_convolution_tiled.log", [1.0, 2.0, 3.0])
    write_log(tmp_path / "random-64x64-f3_convolution_naive.log", [9.0, 7.0])

    df = box_plot.collect("random-64x64-f3", str(tmp_path))

    assert list(df.columns) == ["naive", "tiled"]
    assert df["tiled"].tolist() == [1.0, 2.0, 3.0]
    assert df["naive"].dropna().tolist() == [9.0, 7.0]
    box_plot.plot("random-64x64-f3", df)
    matplotlib.pyplot.close("all")


def test_bar_chart_draws_every_implementation(tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    from plot_charts import load_dataset, plot

    results = tmp_path / "results"
    results.mkdir()
    write_log(results / "random-64x64-f3_convolution_tiled.log", [2.0])
    write_log(results / "random-64x64-f3_convolution_cpu.log", [50.0])
    compute_average_per_run(str(results), str(tmp_path / "dataset"))

    ax = plot(load_dataset(str(tmp_path / "dataset")))

    assert ax.get_yscale() == "log"
    matplotlib.pyplot.close("all")
