# UI module initialization
