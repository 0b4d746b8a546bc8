# Tile edge length: one CUDA block of TILE_DIM x TILE_DIM threads per tile.
# Numba freezes these globals into the kernels at compile time, so they can
# size shared memory arrays.
TILE_DIM = 16
MAX_FILTER_SIZE = TILE_DIM - 1  # filter_size must stay below the tile edge

STAGING_DIM = 3 * TILE_DIM  # the tile plus its 8 neighbours
FILTER_BUFFER_LENGTH = MAX_FILTER_SIZE * MAX_FILTER_SIZE

# Runtime defaults, overridden from the command line
DEFAULT_NUM_ROW = 2048
DEFAULT_NUM_COL = 2048
DEFAULT_FILTER_SIZE = 9
DEFAULT_SIGMA = 1.0
DEFAULT_TOLERANCE = 1e-6
DEFAULT_REPEAT = 10

RESULTS_DIR = "results"  # Directory to store the execution logs
DATASET_DIR = "dataset"  # Directory to store the aggregated averages
