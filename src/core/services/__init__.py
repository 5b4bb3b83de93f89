"""Services of the core: server selection, message routing, shutdown and
the edit session pipeline that ties them together."""
