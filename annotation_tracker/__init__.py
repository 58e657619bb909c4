# Empty file to make annotation_tracker a package
