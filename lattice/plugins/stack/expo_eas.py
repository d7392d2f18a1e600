"""
Expo EAS stack plugin — Expo Router app with TypeScript, ESLint and Jest.

Also writes ``.cursor/rules.md``: editor rules stamped with the
generator version, policy version and config hash of the run.
"""

from __future__ import annotations

from lattice import __version__
from lattice.core.context import GenerationContext
from lattice.core.hashing import compute_config_hash
from lattice.core.models.config import ProjectConfig
from lattice.plugins.base import Plugin, ValidationResult
from lattice.plugins.stack.common import check_scripts, eslint_config, json_bytes, text_bytes

_PACKAGE_JSON = {
    "name": "my-app",
    "version": "0.1.0",
    "private": True,
    "main": "expo-router/entry",
    "scripts": {
        "start": "expo start",
        "android": "expo start --android",
        "ios": "expo start --ios",
        "web": "expo start --web",
        "lint": "eslint .",
        "typecheck": "tsc --noEmit",
        "test": "jest",
    },
    "dependencies": {
        "expo": "~52.0.0",
        "expo-router": "~4.0.0",
        "expo-status-bar": "~2.0.0",
        "react": "18.3.1",
        "react-native": "0.76.5",
    },
    "devDependencies": {
        "@babel/core": "^7.25.0",
        "@types/react": "~18.3.12",
        "typescript": "^5.3.3",
        "eslint": "^9.0.0",
        "@typescript-eslint/parser": "^8.0.0",
        "@typescript-eslint/eslint-plugin": "^8.0.0",
        "jest": "^29.7.0",
        "@types/jest": "^29.5.11",
        "ts-jest": "^29.1.1",
        "@testing-library/react-native": "^12.8.0",
        "react-test-renderer": "18.3.1",
        "jest-expo": "~52.0.0",
        "@testing-library/jest-native": "^5.4.3",
    },
}

_TSCONFIG_JSON = {
    "extends": "expo/tsconfig.base",
    "compilerOptions": {
        "strict": True,
        "paths": {"@/*": ["./*"]},
    },
    "include": ["**/*.ts", "**/*.tsx", ".expo/types/**/*.ts"],
    "exclude": ["node_modules"],
}

_APP_JSON = {
    "expo": {
        "name": "my-app",
        "slug": "my-app",
        "version": "0.1.0",
        "orientation": "portrait",
        "icon": "./assets/icon.png",
        "userInterfaceStyle": "light",
        "splash": {
            "image": "./assets/splash.png",
            "resizeMode": "contain",
            "backgroundColor": "#ffffff",
        },
        "assetBundlePatterns": ["**/*"],
        "ios": {"supportsTablet": True},
        "android": {
            "adaptiveIcon": {
                "foregroundImage": "./assets/adaptive-icon.png",
                "backgroundColor": "#ffffff",
            },
        },
        "web": {"favicon": "./assets/favicon.png"},
        "plugins": ["expo-router"],
        "scheme": "my-app",
    },
}

_APP_LAYOUT = """\
import { Stack } from 'expo-router';

export default function RootLayout() {
  return (
    <Stack>
      <Stack.Screen name="index" options={{ title: 'Home' }} />
    </Stack>
  );
}
"""

_APP_INDEX = """\
import { Text, View, StyleSheet } from 'react-native';
import { StatusBar } from 'expo-status-bar';

export default function Index() {
  return (
    <View style={styles.container}>
      <Text style={styles.title}>Welcome to Expo</Text>
      <StatusBar style="auto" />
    </View>
  );
}

const styles = StyleSheet.create({
  container: {
    flex: 1,
    backgroundColor: '#fff',
    alignItems: 'center',
    justifyContent: 'center',
  },
  title: {
    fontSize: 20,
    fontWeight: 'bold',
  },
});
"""

_JEST_CONFIG = """\
module.exports = {
  preset: 'jest-expo',
  setupFilesAfterEnv: ['<rootDir>/jest.setup.js'],
  transformIgnorePatterns: [
    'node_modules/(?!((jest-)?react-native|@react-native(-community)?)|expo(nent)?|@expo(nent)?/.*|@expo-google-fonts/.*|react-navigation|@react-navigation/.*|@unimodules/.*|unimodules|sentry-expo|native-base|react-native-svg)',
  ],
  moduleNameMapper: {
    '^@/(.*)$': '<rootDir>/$1',
  },
};
"""

_JEST_SETUP = """\
import '@testing-library/jest-native/extend-expect';
"""

_APP_INDEX_TEST = """\
import { render, screen } from '@testing-library/react-native';
import Index from './index';

describe('Index', () => {
  it('renders welcome message', () => {
    render(<Index />);
    expect(screen.getByText('Welcome to Expo')).toBeTruthy();
  });
});
"""

_CURSOR_RULES = """\
<!--
latticeVersion: {lattice_version}
stack: expo-eas
policyVersion: {policy_version}
strictnessPreset: {preset}
configHash: {config_hash}
-->

# Lattice Bootstrap Cursor Rules - Expo EAS

You are a senior full-stack engineer responsible for production-quality Expo applications.

## Core Operating Rules

- Stay strictly within the scope explicitly defined in the current task.
- Do not invent features, abstractions, or future functionality.
- All code must compile, typecheck, and pass tests.
- Determinism is mandatory: no timestamps, UUIDs, randomness, or network calls.
- Prefer simple, explicit implementations over clever ones.

## File Structure

- Use Expo Router conventions: `app/` directory for routes and screens.
- Use `_layout.tsx` for navigation layouts, `index.tsx` for route screens.

## Required Checks

{required_checks}

## Verification Commands

- `npm run lint`: Run ESLint to check code quality.
- `npm run typecheck`: Run TypeScript compiler in check mode.
- `npm test`: Run Jest tests with React Native Testing Library.
- Production builds use EAS Build: `eas build --platform ios/android`.

## Hard Stop Conditions

- If requirements conflict, stop and ask.
- If verification fails, stop and fix.
- If scope is unclear, stop and clarify.
"""

# Policy check → npm script that runs it. Expo has no local build step.
_CHECK_SCRIPTS = {
    "lint": "lint",
    "typecheck": "typecheck",
    "test": "test",
}


def _cursor_rules(context: GenerationContext) -> str:
    checks = context.policy.required_checks
    check_lines = "\n".join(f"- {check}" for check in checks) or "- none"
    return _CURSOR_RULES.format(
        lattice_version=__version__,
        policy_version=context.policy.version,
        preset=context.config.strictness_preset,
        config_hash=compute_config_hash(context.config),
        required_checks=check_lines,
    )


class ExpoEasPlugin(Plugin):
    """Base files for an Expo app built with EAS."""

    id = "stack/expo-eas"
    version = "0.1.0"
    phase = "render"
    conflict_policy = "error"

    def applies_to(self, config: ProjectConfig) -> bool:
        return config.project_type == "expo-eas"

    def apply(self, context: GenerationContext) -> None:
        if context.has_file("package.json"):
            raise FileExistsError("package.json already exists")

        context.add_file("package.json", json_bytes(_PACKAGE_JSON))
        context.add_file("tsconfig.json", json_bytes(_TSCONFIG_JSON))
        context.add_file("app.json", json_bytes(_APP_JSON))
        context.add_file(
            "eslint.config.mjs",
            text_bytes(eslint_config([".expo/**", "node_modules/**", "dist/**"])),
        )
        context.add_file("app/_layout.tsx", text_bytes(_APP_LAYOUT))
        context.add_file("app/index.tsx", text_bytes(_APP_INDEX))
        context.add_file("jest.config.js", text_bytes(_JEST_CONFIG))
        context.add_file("jest.setup.js", text_bytes(_JEST_SETUP))
        context.add_file("app/index.test.tsx", text_bytes(_APP_INDEX_TEST))
        context.add_file(".cursor/rules.md", text_bytes(_cursor_rules(context)))

    def validate(self, context: GenerationContext) -> ValidationResult:
        return check_scripts(context, _CHECK_SCRIPTS)
