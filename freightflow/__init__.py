"""FreightFlow dashboard, feed, notification and health service."""
