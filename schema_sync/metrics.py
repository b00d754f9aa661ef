"""
Prometheus metrics for schema bridge monitoring
"""
from prometheus_client import Counter, Histogram, start_http_server

# ====================================
# KAFKA MESSAGE METRICS
# ====================================
schema_messages_total = Counter(
    'hive_bridge_messages_total',
    'Total number of schema messages handled',
    ['status']  # status: applied/skipped/dead_lettered/failed
)

# ====================================
# DDL METRICS
# ====================================
ddl_statements_total = Counter(
    'hive_bridge_ddl_statements_total',
    'Total number of DDL statements sent to the execution engine',
    ['kind', 'status']  # kind: database/table, status: success/failed
)

ddl_execution_duration = Histogram(
    'hive_bridge_ddl_execution_duration_seconds',
    'Time taken by the execution engine to apply a DDL statement',
    ['kind'],
    buckets=(0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0, float("inf"))
)


def start_metrics_server(port):
    """Expose metrics over HTTP when a port is configured."""
    if port:
        start_http_server(port)
        return True
    return False
