from prometheus_client import CollectorRegistry

# Dedicated registry so embedding apps decide what gets exposed.
REGISTRY = CollectorRegistry(auto_describe=True)
