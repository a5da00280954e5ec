"""ThriftDesk staff back office package.

Holds the markdown lifecycle for red tag inventory, the furniture approval
workflow and the communication log with its urgent broadcast channel.
"""
