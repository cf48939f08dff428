"""Core types for csvrecord: exceptions, field descriptors and configuration."""
