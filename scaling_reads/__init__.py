"""scaling-reads: read-scaling album service (replica reads, cache-aside, primary writes)."""
