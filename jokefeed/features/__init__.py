"""Feature packages: fetch, store, navigation, observability."""
