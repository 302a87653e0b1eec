"""
Prometheus metrics definitions.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Bucket metrics
buckets_created_total = Counter(
    'buckets_created_total',
    'Total bucket create requests',
    ['result']  # created | already_exists
)

# Upload metrics
files_staged_total = Counter(
    'files_staged_total',
    'Total files staged for upload',
    ['source']
)

uploads_total = Counter(
    'uploads_total',
    'Total staged files processed by the upload workflow',
    ['outcome']  # uploaded | skipped | failed
)

upload_bytes_total = Counter(
    'upload_bytes_total',
    'Total bytes uploaded to storage'
)

# Gallery metrics
gallery_renders_total = Counter(
    'gallery_renders_total',
    'Total gallery renders'
)

gallery_render_duration_seconds = Histogram(
    'gallery_render_duration_seconds',
    'Gallery render duration in seconds (listing plus URL resolution)',
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

signed_url_fallbacks_total = Counter(
    'signed_url_fallbacks_total',
    'Objects whose signed URL failed and fell back to a public URL'
)

# Storage metrics
storage_failures_total = Counter(
    'storage_failures_total',
    'Total storage service failures',
    ['operation']
)
