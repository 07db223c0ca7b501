"""
Prometheus metrics for codec usage and HTTP request latency.
"""
from prometheus_client import Counter, Histogram

# Codec metrics
codec_operations_total = Counter(
    'digipin_codec_operations_total',
    'Total number of codec operations',
    ['operation', 'status']
)

codec_warnings_total = Counter(
    'digipin_codec_warnings_total',
    'Advisory warnings attached to codec results',
    ['operation']
)

# Search metrics
search_results_count = Histogram(
    'digipin_search_results_count',
    'Number of cells returned by a search',
    ['operation'],
    buckets=(0, 1, 8, 24, 100, 1000, 10000, 40401)
)

# Latency metrics
request_duration_seconds = Histogram(
    'digipin_request_duration_seconds',
    'Request latency in seconds',
    ['endpoint']
)
