# Import libraries
import os
import sys

import matplotlib.pyplot as plt
import pandas as pd

from Convolution.Settings import RESULTS_DIR
from create_dataset import IMPLEMENTATIONS, read_elapsed_times


def collect(run_name, input_folder=RESULTS_DIR):
    """
    Per repetition elapsed times of one run, one column per implementation
    """
    data = {}
    for implementation in IMPLEMENTATIONS:
        path = os.path.join(input_folder, f'{run_name}_convolution_{implementation}.log')
        if not os.path.exists(path):
            continue
        data[implementation] = pd.Series(read_elapsed_times(path), dtype=float)
    return pd.DataFrame(data)


def plot(run_name, df):
    # Create a box plot
    plt.figure(figsize=(10, 6))
    plt.boxplot([df[column].dropna() for column in df.columns], patch_artist=True)
    plt.xticks(range(1, len(df.columns) + 1), df.columns, rotation=45)
    plt.yscale('log')
    plt.xlabel('Implementation')
    plt.ylabel('Elapsed Time (ms)')
    plt.title(f'Box Plot for {run_name}')


if __name__ == '__main__':
    run = sys.argv[1] if len(sys.argv) > 1 else 'random-2048x2048-f9'
    plot(run, collect(run))
    # show plot
    plt.show()
