# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
buildvariant: signing and build-variant resolution for Android/Flutter builds.

Turns a build-type selector plus an optional key.properties file into an
explicit, observable variant policy that the external Gradle toolchain can
consume.
"""

__version__ = "0.1.0"
