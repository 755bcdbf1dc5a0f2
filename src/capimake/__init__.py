# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 CapiMake: packaging of compiled libraries as C-ABI libraries.
"""
