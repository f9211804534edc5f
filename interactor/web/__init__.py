# HTTP status endpoint
