"""Feed transport and document decoders."""
