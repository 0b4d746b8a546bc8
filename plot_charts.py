import os

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from Convolution.Settings import DATASET_DIR
from create_dataset import IMPLEMENTATIONS

LABELS = {
    'cpu': 'CPU',
    'skimage': 'CPU SKIMAGE',
    'naive': 'GPU NAIVE',
    'constant': 'GPU CONSTANT',
    'tiled': 'GPU TILED',
}


def load_dataset(dataset_folder=DATASET_DIR):
    """
    One row per (run, implementation) with the average time in ms
    """
    frames = []
    for implementation in IMPLEMENTATIONS:
        path = os.path.join(dataset_folder, implementation + '.data')
        if not os.path.exists(path):
            continue
        df = pd.read_csv(path, sep=';', header=0, names=['Run', 'Time (ms)'])
        df['Hardware'] = LABELS[implementation]
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=['Run', 'Time (ms)', 'Hardware'])
    return pd.concat(frames, ignore_index=True)


def plot(df):
    # Set the style
    sns.set_style("whitegrid")

    plt.figure(figsize=(8, 5))
    ax = sns.barplot(x="Run", y="Time (ms)", hue="Hardware", data=df)

    # Set a logarithmic scale for the y-axis
    ax.set_yscale("log")

    # Add labels to the bars
    for p in ax.patches:
        if p.get_height() > 0:
            ax.annotate(f"{p.get_height():.2f}",
                        (p.get_x() + p.get_width() / 2, p.get_height()),
                        ha="center", va="bottom", fontsize=8, color="black")

    plt.title("Gaussian blur execution time per implementation", fontsize=14)
    plt.xlabel("Run", fontsize=12)
    plt.ylabel("Execution time (ms)", fontsize=12)
    plt.legend(title="Hardware")
    return ax


if __name__ == '__main__':
    plot(load_dataset())
    plt.show()
