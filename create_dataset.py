"""
Program to extract the data from the log files and aggregate it into one dataset file per implementation.

The log files are named <run name>_convolution_<implementation>.log, each line
holds the execution time of one repetition.
For each implementation an output file is written containing the average elapsed time per run.

Example:
    - dataset/tiled.data : average elapsed time of the tiled shared memory kernel, one line per run
    - dataset/cpu.data : average elapsed time of the CPU reference, one line per run

The content of each file is a CSV separated with ';'. An header is present to identify the columns (run name and average elapsed time).
"""

import os

from Convolution.Settings import DATASET_DIR, RESULTS_DIR

IMPLEMENTATIONS = ['cpu', 'skimage', 'naive', 'constant', 'tiled']
HEADER = 'Run name; Average elapsed time (ms)\n'


def read_elapsed_times(path):
    with open(path, 'r') as file:
        content = file.readlines()
    return [float(line.split('EXECUTION TIME ms: ')[1].split(',')[0]) for line in content if 'EXECUTION TIME ms: ' in line]


def compute_average_per_run(input_folder=RESULTS_DIR, output_folder=DATASET_DIR):
    """
    Compute the average elapsed time per run for each implementation.
    Returns {implementation: {run name: average ms}}.
    """
    if not os.path.exists(output_folder):
        os.makedirs(output_folder)

    averages = {implementation: {} for implementation in IMPLEMENTATIONS}

    # Iterate over the log files
    for file_name in sorted(os.listdir(input_folder)):
        if not file_name.endswith('.log') or '_convolution_' not in file_name:
            continue

        run_name, implementation = file_name[:-len('.log')].split('_convolution_')
        if implementation not in averages:
            continue

        elapsed_times = read_elapsed_times(os.path.join(input_folder, file_name))
        if not elapsed_times:
            continue
        averages[implementation][run_name] = sum(elapsed_times) / len(elapsed_times)

    # Write the average elapsed time per run to the output files
    for implementation, runs in averages.items():
        with open(os.path.join(output_folder, implementation + '.data'), 'w') as file:
            file.write(HEADER)
            for run_name, average_elapsed_time in runs.items():
                file.write(run_name + ';' + str(average_elapsed_time) + '\n')

    return averages


if __name__ == '__main__':
    compute_average_per_run()
