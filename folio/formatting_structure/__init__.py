"""The formatting structure is a tree of boxes.

It is built from the element tree, then laid out. Boxes that are
positioned, transformed, isolated or clipped own a stacking node.

"""
