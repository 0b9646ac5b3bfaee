"""Persistence: master database engine, tenant directory, per-tenant connections."""
