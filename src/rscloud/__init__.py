"""rscloud - client and CLI for Rackspace Cloud Servers and Load Balancers."""

__version__ = "0.2.0"
