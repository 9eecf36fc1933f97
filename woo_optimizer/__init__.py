"""WooCommerce Server Optimizer: tuned server configs from hardware and workload specs."""

__version__ = "0.1.0"
