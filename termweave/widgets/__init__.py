"""Ready-made widgets: text, rich text, centring, flex layout, lists, text fields and buttons."""