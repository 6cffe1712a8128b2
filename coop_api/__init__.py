"""Backend de Coop: emparejamiento de relays."""
