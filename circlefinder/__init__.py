"""circlefinder — pick the most circular blob out of a segmented video frame."""
