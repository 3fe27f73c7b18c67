"""gridresults default configuration file

Every configuration element ever used in the program must exist here.
These defaults may be overridden in the user's config file.

The variables guaranteed to be available are set in config.environ()
"""


# Regular expression matching the base name of a test result artifact
test_result_pattern = r'.*test_result_\d+\.xml$'

# Additional artifact file name patterns to collect along with the test results
files_to_download = []

# Directory holding the local copies of run directories
local_result_dir = 'results'

# Name of the matrix map file stored in the root of each run directory
matrix_ids_file = 'matrix_ids.json'

# Name of the merged JUnit report written to the root of each run directory
junit_report_file = 'JUnitReport.xml'

# Name of the error report written to the root of each run directory on failure
html_error_report_file = 'error.html'

# Location of the historical timing baseline: a local file name, or an http(s) URL.
# An empty value disables timing download and upload.
timing_path = ''

# Path to the local copy of downloaded historical timing baselines
timing_cache_path = '{XDG_CACHE_HOME}/gridresults'

# Don't compress a file if it's shorter than this length.
# 128 is the normal maximum length allowed for data inline in ext4 inodes, so using this
# will cause absolutely no disk space increase for such files on such filesystems.
compress_threshold_bytes = 128

# Seconds to wait for a response from the timing server
http_timeout = 60
