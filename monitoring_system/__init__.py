"""Device fleet management API with a Prometheus metrics listener"""
