"""Infrastructure: Redis cache, master database, tenancy resolution chain and health probes."""
