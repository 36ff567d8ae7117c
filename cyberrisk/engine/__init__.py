"""Pure assessment engine: catalog, visibility, scoring and result builders."""
