# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Pre-flight validation of signing and ProGuard inputs."""
