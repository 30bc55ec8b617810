"""Domain Layer: value types, the cache file format and the ports
(interfaces) that the infrastructure layer implements.
"""
