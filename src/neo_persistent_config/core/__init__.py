"""Core building blocks shared by every layer of neo-persistent-config."""
