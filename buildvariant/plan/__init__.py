# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build plan output: the JSON record of a resolved build and the injected
signing properties handed to Gradle.
"""
