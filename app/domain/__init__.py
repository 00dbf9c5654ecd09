# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""
领域层：

- models: 文档页面（Page）
"""
from . import models  # noqa: F401

__all__ = ["models"]
